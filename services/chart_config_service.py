import logging
from typing import Any, Dict, Mapping, Sequence, Tuple

from models.common_models import AnalysisResult, ChartConfig
from services.chart_service import validate_chart_type
from services.errors import ChartConfigNotFoundError, ChartConfigurationError

logger = logging.getLogger(__name__)

# Active chart configs per session. Each change swaps in a new tuple.
_CHART_CONFIGS: Dict[str, Tuple[ChartConfig, ...]] = {}

# Column inventory / numeric columns of the table each session currently shows
_SESSION_COLUMNS: Dict[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {}


def default_chart_config(columns: Sequence[str], numeric_columns: Sequence[str]) -> ChartConfig:
    return ChartConfig(
        x_axis=columns[0] if columns else None,
        y_axis=numeric_columns[0] if numeric_columns else None,
        chart_type="bar",
    )


def init_chart_configs(session_id: str, analysis: AnalysisResult) -> Tuple[ChartConfig, ...]:
    """Start a freshly loaded table with a single default chart."""
    _SESSION_COLUMNS[session_id] = (tuple(analysis.columns), tuple(analysis.numeric_columns))
    configs = (default_chart_config(analysis.columns, analysis.numeric_columns),)
    _CHART_CONFIGS[session_id] = configs
    return configs


def list_chart_configs(session_id: str) -> Tuple[ChartConfig, ...]:
    return _CHART_CONFIGS.get(session_id, ())


def get_chart_config(session_id: str, index: int) -> ChartConfig:
    configs = list_chart_configs(session_id)
    if index < 0 or index >= len(configs):
        raise ChartConfigNotFoundError(f"No chart at index {index}.")
    return configs[index]


def add_chart_config(session_id: str) -> ChartConfig:
    columns, numeric_columns = _SESSION_COLUMNS.get(session_id, ((), ()))
    config = default_chart_config(columns, numeric_columns)
    _CHART_CONFIGS[session_id] = list_chart_configs(session_id) + (config,)
    return config


def _validate_updates(session_id: str, updates: Mapping[str, Any]) -> None:
    columns, numeric_columns = _SESSION_COLUMNS.get(session_id, ((), ()))

    if "chart_type" in updates:
        if updates["chart_type"] is None:
            raise ChartConfigurationError("chart_type cannot be cleared.")
        validate_chart_type(updates["chart_type"])

    x_axis = updates.get("x_axis")
    if x_axis is not None and x_axis not in columns:
        raise ChartConfigurationError(f"Column '{x_axis}' is not in the loaded table.")

    y_axis = updates.get("y_axis")
    if y_axis is not None and y_axis not in numeric_columns:
        raise ChartConfigurationError(f"Column '{y_axis}' is not a numeric column of the loaded table.")


def update_chart_config(session_id: str, index: int, updates: Mapping[str, Any]) -> ChartConfig:
    """
    Apply field updates to the chart at `index`.
    Only x_axis, y_axis and chart_type are accepted; None clears an axis.
    """
    unknown = set(updates) - {"x_axis", "y_axis", "chart_type"}
    if unknown:
        raise ChartConfigurationError(f"Unknown chart config field(s): {', '.join(sorted(unknown))}.")

    current = get_chart_config(session_id, index)
    _validate_updates(session_id, updates)

    updated = current.model_copy(update=dict(updates))
    configs = list_chart_configs(session_id)
    _CHART_CONFIGS[session_id] = configs[:index] + (updated,) + configs[index + 1:]
    return updated


def remove_chart_config(session_id: str, index: int) -> ChartConfig:
    removed = get_chart_config(session_id, index)
    configs = list_chart_configs(session_id)
    _CHART_CONFIGS[session_id] = configs[:index] + configs[index + 1:]
    logger.debug("Removed chart %d from session %s", index, session_id)
    return removed


def clear_chart_configs(session_id: str) -> None:
    _CHART_CONFIGS.pop(session_id, None)
    _SESSION_COLUMNS.pop(session_id, None)
