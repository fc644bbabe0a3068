import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Where uploaded files are stored
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploaded_excels")
os.makedirs(UPLOAD_DIR, exist_ok=True)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./sessions.db")

PREVIEW_ROWS = int(os.getenv("PREVIEW_ROWS", "20"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Used by the Streamlit frontend
BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")
