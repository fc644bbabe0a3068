from fastapi import APIRouter, HTTPException
from models.common_models import AnalysisResult, PreviewRequest, StatsRequest
from services.errors import SheetNotLoadedError
from services.session_service import get_session
from services.preview_service import get_preview_rows
from services.stats_service import get_statistical_summary

router = APIRouter(prefix="/data", tags=["data"])

@router.post("/preview")
async def preview_data(req: PreviewRequest):
    session = get_session(req.session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found.")

    try:
        return get_preview_rows(req.session_id, req.sheet_name, req.n_rows)
    except SheetNotLoadedError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0])

@router.post("/stats", response_model=AnalysisResult)
async def stats_data(req: StatsRequest):
    session = get_session(req.session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found.")

    try:
        return get_statistical_summary(req.session_id, req.sheet_name)
    except SheetNotLoadedError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0])
