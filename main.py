import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, LOG_LEVEL
from routers import upload_router, data_router, chart_router

# Import DB init function
from database import Base, engine
from models.session_db_model import SessionDB

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

def create_db():
    Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Spreadsheet Dashboard Backend",
    description="Upload a spreadsheet, get column statistics and configurable chart series.",
    version="0.1.0",
)

# Run create_db() once when app starts
@app.on_event("startup")
def on_startup():
    logger.info("Initializing database (%s table)...", SessionDB.__tablename__)
    create_db()
    logger.info("Database initialized.")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload_router.router)
app.include_router(data_router.router)
app.include_router(chart_router.router)

@app.get("/")
async def root():
    return {"message": "Spreadsheet Dashboard API is running"}
