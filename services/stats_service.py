from datetime import date
from typing import Dict, List, Optional
import math

import pandas as pd
from models.common_models import AnalysisResult, ColumnStats, MissingValues, Row
from services.coercion import coerce_number
from .excel_reader_service import get_sheet_rows


def column_inventory(rows: List[Row]) -> List[str]:
    """Column names of the first row, in first-seen order."""
    if not rows:
        return []
    return list(rows[0].keys())


def _float_or_none(value) -> Optional[float]:
    # inf/nan (e.g. an overflowed sum) is reported as undefined
    if value is None or pd.isna(value) or not math.isfinite(value):
        return None
    return float(value)


def _mean(valid: pd.Series) -> Optional[float]:
    mean = valid.mean()
    if not math.isfinite(mean):
        # The plain sum overflowed; scale each value down first
        mean = (valid / valid.shape[0]).sum()
    return _float_or_none(mean)


def _column_type(col: str, raw: pd.Series, is_numeric: bool) -> str:
    if is_numeric:
        return "numerical"

    non_null = raw.dropna()
    if any(isinstance(v, date) for v in non_null) or any(k in col.lower() for k in ["date", "time"]):
        return "datetime"

    count = int(non_null.shape[0])
    unique = int(non_null.astype(str).nunique())

    # PRIMARY KEY CASE
    if count == unique:
        return "primary_key" if "id" in col.lower() else "distinct_categorical"
    return "foreign_key" if "id" in col.lower() else "categorical"


def _column_stats(col: str, raw: pd.Series, numbers: pd.Series) -> ColumnStats:
    valid = numbers.dropna()
    n = int(valid.shape[0])

    non_null = raw.dropna()
    as_text = non_null.astype(str)
    counts = as_text.value_counts()

    top, freq = None, None
    if not counts.empty:
        top = str(counts.index[0])
        freq = int(counts.iloc[0])

    # No numeric values: every numeric metric is undefined
    return ColumnStats(
        type=_column_type(col, raw, n > 0),
        count=n,
        non_null=int(non_null.shape[0]),
        missing=int(raw.shape[0] - non_null.shape[0]),
        unique=int(as_text.nunique()),
        min=_float_or_none(valid.min()) if n > 0 else None,
        max=_float_or_none(valid.max()) if n > 0 else None,
        mean=_mean(valid) if n > 0 else None,
        median=_float_or_none(valid.median()) if n > 0 else None,
        std=_float_or_none(valid.std()) if n > 1 else None,
        sum=_float_or_none(valid.sum()) if n > 0 else None,
        top=top,
        freq=freq,
    )


def analyze(rows: List[Row]) -> AnalysisResult:
    """
    Column inventory, numeric-column detection and per-column summary
    statistics for a decoded sheet. Does not modify `rows`.
    """
    columns = column_inventory(rows)

    # Keys absent from a row read as empty cells
    raw_df = pd.DataFrame(
        [[row.get(col) for col in columns] for row in rows],
        columns=columns,
        dtype=object,
    )

    numeric_columns: List[str] = []
    summary: Dict[str, ColumnStats] = {}
    missing_count: Dict[str, int] = {}
    missing_pct: Dict[str, float] = {}

    for col in columns:
        raw = raw_df[col]
        numbers = pd.Series([coerce_number(v) for v in raw], dtype="float64")

        stats = _column_stats(col, raw, numbers)
        if stats.count > 0:
            numeric_columns.append(col)
        summary[col] = stats

        missing_count[col] = stats.missing
        missing_pct[col] = round(stats.missing / len(rows) * 100, 2) if rows else 0.0

    return AnalysisResult(
        total_rows=len(rows),
        columns=columns,
        numeric_columns=numeric_columns,
        summary_stats=summary,
        missing_values=MissingValues(count=missing_count, percent=missing_pct),
    )


def get_statistical_summary(session_id: str, sheet_name: Optional[str] = None) -> AnalysisResult:
    rows = get_sheet_rows(session_id, sheet_name)
    return analyze(rows)
