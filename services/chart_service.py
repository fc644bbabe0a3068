import math
from typing import List

from models.common_models import ChartConfig, PreparedSeries, Row
from services.coercion import coerce_number
from services.errors import ChartConfigurationError

CHART_TYPES = ["bar", "line", "pie", "scatter", "radar", "doughnut"]

# Kinds drawn without x/y axes
AXISLESS_CHART_TYPES = {"pie", "doughnut"}


def validate_chart_type(chart_type: str) -> str:
    if chart_type not in CHART_TYPES:
        raise ChartConfigurationError(
            f"Unknown chart type '{chart_type}'. Expected one of: {', '.join(CHART_TYPES)}."
        )
    return chart_type


def chart_title(config: ChartConfig) -> str:
    return f"{config.chart_type.upper()} Chart: {config.x_axis} vs {config.y_axis}"


def shape(rows: List[Row], config: ChartConfig) -> PreparedSeries:
    """
    Build the label/value series for one chart.

    Rows whose y value is not a number are dropped, label included.
    Output keeps the row order. Columns missing from the rows (for example
    a config left over from another file) just produce an empty series.
    """
    if not config.x_axis or not config.y_axis:
        raise ChartConfigurationError("Both x_axis and y_axis must be selected before shaping.")
    validate_chart_type(config.chart_type)

    labels = []
    values: List[float] = []
    for row in rows:
        y = coerce_number(row.get(config.y_axis))
        if math.isnan(y):
            continue
        labels.append(row.get(config.x_axis))
        values.append(y)

    return PreparedSeries(
        chart_type=config.chart_type,
        title=chart_title(config),
        x_title=config.x_axis,
        y_title=config.y_axis,
        has_axes=config.chart_type not in AXISLESS_CHART_TYPES,
        labels=labels,
        values=values,
    )
