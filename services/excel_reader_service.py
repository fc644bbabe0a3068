import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from models.common_models import CellValue, Row, SheetInfo
from services.errors import SheetNotLoadedError

logger = logging.getLogger(__name__)

# In-memory cache of decoded sheets per session, in workbook order
_EXCEL_CACHE: Dict[str, Dict[str, List[Row]]] = {}


def _to_cell(value: Any) -> CellValue:
    """Map a pandas/numpy cell to the plain Python cell union."""
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if isinstance(value, (float, np.floating)) and np.isnan(value):
        return None
    if value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (str, bool, int, float, datetime)):
        return value
    return str(value)


def dataframe_to_rows(df: pd.DataFrame) -> List[Row]:
    """
    Turn a parsed sheet into an ordered list of row dicts.
    Every row carries every header, with None for empty cells.
    """
    columns = [str(c) for c in df.columns]
    rows: List[Row] = []
    for record in df.itertuples(index=False, name=None):
        rows.append({col: _to_cell(val) for col, val in zip(columns, record)})
    return rows


def load_excel_for_session(session_id: str, file_path: str) -> List[SheetInfo]:
    """
    Read Excel file and store per-session decoded sheets in cache.
    Returns metadata for all sheets.
    """
    xls = pd.ExcelFile(file_path)
    sheet_infos: List[SheetInfo] = []
    sheet_rows: Dict[str, List[Row]] = {}

    for sheet_name in xls.sheet_names:
        df = xls.parse(sheet_name)
        sheet_rows[str(sheet_name)] = dataframe_to_rows(df)
        sheet_infos.append(
            SheetInfo(
                sheet_name=str(sheet_name),
                n_rows=int(df.shape[0]),
                n_cols=int(df.shape[1])
            )
        )

    _EXCEL_CACHE[session_id] = sheet_rows
    logger.info("Loaded %d sheet(s) for session %s", len(sheet_infos), session_id)
    return sheet_infos


def get_sheet_rows(session_id: str, sheet_name: Optional[str] = None) -> List[Row]:
    """Rows of a cached sheet; the first sheet when no name is given."""
    if session_id not in _EXCEL_CACHE:
        raise SheetNotLoadedError("Excel data not loaded for this session.")
    sheets = _EXCEL_CACHE[session_id]
    if sheet_name is None:
        if not sheets:
            raise SheetNotLoadedError("Workbook has no sheets.")
        sheet_name = next(iter(sheets))
    if sheet_name not in sheets:
        raise SheetNotLoadedError(f"Sheet '{sheet_name}' not found for this session.")
    return sheets[sheet_name]


def drop_session_sheets(session_id: str) -> None:
    _EXCEL_CACHE.pop(session_id, None)
