import logging
from typing import List, Union

from fastapi import APIRouter, HTTPException
from models.common_models import ChartConfig, ChartConfigUpdate, ChartImage, ChartPlaceholder, PreparedSeries
from models.session_db_model import SessionDB
from services.chart_config_service import (
    add_chart_config,
    get_chart_config,
    list_chart_configs,
    remove_chart_config,
    update_chart_config,
)
from services.chart_render_service import render_chart
from services.chart_service import CHART_TYPES, shape
from services.errors import ChartConfigNotFoundError, ChartConfigurationError, SheetNotLoadedError
from services.excel_reader_service import get_sheet_rows
from services.session_service import get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/charts", tags=["charts"])

AXES_MISSING_MESSAGE = "Please select X and Y axes"


def _require_session(session_id: str) -> SessionDB:
    session = get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found.")
    return session


def _require_config(session_id: str, index: int) -> ChartConfig:
    try:
        return get_chart_config(session_id, index)
    except ChartConfigNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0])


def _series_or_placeholder(session: SessionDB, config: ChartConfig) -> Union[PreparedSeries, ChartPlaceholder]:
    # No chart yet, not an error
    if not config.x_axis or not config.y_axis:
        return ChartPlaceholder(status="incomplete", message=AXES_MISSING_MESSAGE)

    try:
        rows = get_sheet_rows(session.session_id, session.primary_sheet)
    except SheetNotLoadedError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0])

    try:
        return shape(rows, config)
    except ChartConfigurationError as exc:
        logger.info("Chart config rejected for session %s: %s", session.session_id, exc)
        return ChartPlaceholder(status="invalid", message=str(exc))


@router.get("/types")
async def chart_types():
    return {"chart_types": CHART_TYPES}


@router.get("/{session_id}", response_model=List[ChartConfig])
async def get_chart_configs(session_id: str):
    _require_session(session_id)
    return list(list_chart_configs(session_id))


@router.post("/{session_id}", response_model=ChartConfig)
async def add_chart(session_id: str):
    _require_session(session_id)
    return add_chart_config(session_id)


@router.patch("/{session_id}/{index}", response_model=ChartConfig)
async def update_chart(session_id: str, index: int, req: ChartConfigUpdate):
    _require_session(session_id)
    try:
        return update_chart_config(session_id, index, req.model_dump(exclude_unset=True))
    except ChartConfigNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0])
    except ChartConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.delete("/{session_id}/{index}", response_model=ChartConfig)
async def delete_chart(session_id: str, index: int):
    _require_session(session_id)
    try:
        return remove_chart_config(session_id, index)
    except ChartConfigNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0])


@router.get("/{session_id}/{index}/series", response_model=Union[PreparedSeries, ChartPlaceholder])
async def chart_series(session_id: str, index: int):
    session = _require_session(session_id)
    config = _require_config(session_id, index)
    return _series_or_placeholder(session, config)


@router.get("/{session_id}/{index}/image", response_model=Union[ChartImage, ChartPlaceholder])
async def chart_image(session_id: str, index: int):
    session = _require_session(session_id)
    config = _require_config(session_id, index)

    series = _series_or_placeholder(session, config)
    if isinstance(series, ChartPlaceholder):
        return series

    image = render_chart(series)
    if image is None:
        return ChartPlaceholder(status="invalid", message="Chart could not be drawn.")

    return ChartImage(
        chart_type=series.chart_type,
        title=series.title,
        n_points=len(series.values),
        image_base64=image,
    )
