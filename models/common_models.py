from datetime import date, datetime
from typing import Any, List, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict

# A decoded spreadsheet cell: text, number, date or empty
CellValue = Union[bool, int, float, datetime, date, str, None]
Row = Dict[str, CellValue]

class SheetInfo(BaseModel):
    sheet_name: str
    n_rows: int
    n_cols: int

class PreviewRequest(BaseModel):
    session_id: str
    sheet_name: Optional[str] = None
    n_rows: Optional[int] = None

class StatsRequest(BaseModel):
    session_id: str
    sheet_name: Optional[str] = None

class ColumnStats(BaseModel):
    type: str                 # "numerical", "categorical", "datetime", ...
    count: int                # values that coerce to a number
    non_null: int
    missing: int
    unique: int
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std: Optional[float] = None
    sum: Optional[float] = None
    top: Optional[str] = None
    freq: Optional[int] = None

class MissingValues(BaseModel):
    count: Dict[str, int]
    percent: Dict[str, float]

class AnalysisResult(BaseModel):
    total_rows: int
    columns: List[str]
    numeric_columns: List[str]
    summary_stats: Dict[str, ColumnStats]
    missing_values: MissingValues

class ChartConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    chart_type: str = "bar"   # one of CHART_TYPES, checked by the chart service

class ChartConfigUpdate(BaseModel):
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    chart_type: Optional[str] = None

class PreparedSeries(BaseModel):
    chart_type: str
    title: str
    x_title: str
    y_title: str
    has_axes: bool
    labels: List[Any]
    values: List[float]

class ChartPlaceholder(BaseModel):
    status: str               # "incomplete" or "invalid"
    message: str

class ChartImage(BaseModel):
    chart_type: str
    title: str
    n_points: int
    image_base64: Optional[str] = None
