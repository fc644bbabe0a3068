from typing import Dict, Any, Optional
from config import PREVIEW_ROWS
from .excel_reader_service import get_sheet_rows
from .stats_service import column_inventory

def get_preview_rows(session_id: str, sheet_name: Optional[str] = None, n_rows: Optional[int] = None) -> Dict[str, Any]:
    rows = get_sheet_rows(session_id, sheet_name)
    n = PREVIEW_ROWS if n_rows is None else max(n_rows, 0)
    return {
        "columns": column_inventory(rows),
        "rows": rows[:n]
    }
