from sqlalchemy import Column, DateTime, String, JSON, func
from database import Base

class SessionDB(Base):
    __tablename__ = "sessions"
    
    session_id = Column(String, primary_key=True, index=True)
    file_name = Column(String, index=True)
    file_path = Column(String)
    primary_sheet = Column(String)
    meta = Column(JSON, default=dict)
    created_at = Column(DateTime, server_default=func.now())
