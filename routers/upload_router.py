import logging
import uuid
from fastapi import APIRouter, UploadFile, File, HTTPException

from services.file_upload_service import save_uploaded_file, delete_uploaded_file
from services.excel_reader_service import load_excel_for_session, get_sheet_rows, drop_session_sheets
from services.stats_service import analyze
from services.chart_config_service import init_chart_configs, clear_chart_configs
from services.session_service import create_session, delete_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

@router.post("/excel")
async def upload_excel(file: UploadFile = File(...)):
    # Every upload is stored as its own file
    try:
        file_path = save_uploaded_file(file)
    except ValueError as exc:
        logger.warning("Rejected upload %r: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    session_id = uuid.uuid4().hex

    try:
        sheet_infos = load_excel_for_session(session_id, file_path)
    except Exception as exc:
        logger.exception("Could not decode %s", file.filename)
        delete_uploaded_file(file_path)
        raise HTTPException(status_code=400, detail=f"Could not read Excel file: {exc}")

    if not sheet_infos:
        delete_uploaded_file(file_path)
        raise HTTPException(status_code=400, detail="Uploaded Excel has no sheets.")

    primary_sheet = sheet_infos[0].sheet_name
    analysis = analyze(get_sheet_rows(session_id, primary_sheet))
    chart_configs = init_chart_configs(session_id, analysis)

    # A new session per upload
    create_session(
        session_id=session_id,
        file_path=file_path,
        file_name=file.filename,
        primary_sheet=primary_sheet,
        meta={
            "total_rows": analysis.total_rows,
            "columns": analysis.columns,
            "numeric_columns": analysis.numeric_columns,
        },
    )

    return {
        "session_id": session_id,
        "file_name": file.filename,
        "primary_sheet": primary_sheet,
        "sheets": [s.model_dump() for s in sheet_infos],
        "analysis": analysis.model_dump(),
        "chart_configs": [c.model_dump() for c in chart_configs],
    }

@router.delete("/{session_id}")
async def release_session(session_id: str):
    """Forget a session: cached sheets, chart configs, stored file and DB row."""
    session = delete_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found.")

    drop_session_sheets(session_id)
    clear_chart_configs(session_id)
    delete_uploaded_file(session.file_path)
    logger.info("Released session %s", session_id)
    return {"session_id": session_id, "released": True}
