from typing import Any, Dict, Optional

from database import SessionLocal
from models.session_db_model import SessionDB


def create_session(session_id: str, file_path: str, file_name: str, primary_sheet: str,
                   meta: Optional[Dict[str, Any]] = None) -> SessionDB:
    with SessionLocal() as db:
        session = SessionDB(
            session_id=session_id,
            file_path=file_path,
            file_name=file_name,
            primary_sheet=primary_sheet,
            meta=meta or {}
        )
        db.add(session)
        db.commit()
        db.refresh(session)
        return session


def get_session(session_id: str) -> Optional[SessionDB]:
    with SessionLocal() as db:
        return db.query(SessionDB).filter(SessionDB.session_id == session_id).first()


def delete_session(session_id: str) -> Optional[SessionDB]:
    with SessionLocal() as db:
        session = db.query(SessionDB).filter(SessionDB.session_id == session_id).first()
        if session:
            db.delete(session)
            db.commit()
        return session
