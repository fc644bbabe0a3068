"""Tests for turning rows and a chart config into a label/value series."""

from datetime import datetime

import pytest

from models.common_models import ChartConfig
from services.chart_service import CHART_TYPES, shape, validate_chart_type
from services.errors import ChartConfigurationError


def test_shape_drops_rows_with_non_numeric_y(sample_rows) -> None:
    series = shape(sample_rows, ChartConfig(x_axis="A", y_axis="B", chart_type="bar"))

    assert series.labels == ["x", "y"]
    assert series.values == [1.0, 2.0]
    assert series.title == "BAR Chart: A vs B"
    assert (series.x_title, series.y_title) == ("A", "B")
    assert series.has_axes is True


def test_shape_keeps_row_order_and_raw_labels() -> None:
    when = datetime(2024, 3, 1)
    rows = [
        {"k": 3, "v": "30"},
        {"k": None, "v": 5},
        {"k": when, "v": "bad"},
        {"k": "first", "v": 1.5},
    ]
    series = shape(rows, ChartConfig(x_axis="k", y_axis="v", chart_type="line"))

    assert series.labels == [3, None, "first"]
    assert series.values == [30.0, 5.0, 1.5]


def test_shape_never_grows_the_table(sample_rows) -> None:
    series = shape(sample_rows, ChartConfig(x_axis="B", y_axis="B", chart_type="scatter"))

    assert len(series.values) <= len(sample_rows)
    assert len(series.labels) == len(series.values)


def test_stale_columns_give_empty_series(sample_rows) -> None:
    series = shape(sample_rows, ChartConfig(x_axis="Region", y_axis="Revenue", chart_type="bar"))

    assert series.labels == []
    assert series.values == []


def test_column_without_numbers_gives_empty_series() -> None:
    rows = [{"A": "x", "B": None}, {"A": "y", "B": "n/a"}]
    series = shape(rows, ChartConfig(x_axis="A", y_axis="B", chart_type="bar"))

    assert series.values == []


@pytest.mark.parametrize("chart_type", ["pie", "doughnut"])
def test_pie_kinds_have_no_axes(sample_rows, chart_type) -> None:
    series = shape(sample_rows, ChartConfig(x_axis="A", y_axis="B", chart_type=chart_type))

    assert series.has_axes is False


@pytest.mark.parametrize(
    "config",
    [
        ChartConfig(x_axis=None, y_axis="B"),
        ChartConfig(x_axis="A", y_axis=None),
        ChartConfig(x_axis="A", y_axis="B", chart_type="histogram"),
    ],
)
def test_invalid_configs_are_rejected(sample_rows, config) -> None:
    with pytest.raises(ChartConfigurationError):
        shape(sample_rows, config)


def test_validate_chart_type() -> None:
    for chart_type in CHART_TYPES:
        assert validate_chart_type(chart_type) == chart_type

    with pytest.raises(ChartConfigurationError, match="Unknown chart type"):
        validate_chart_type("BAR")


def test_shape_is_repeatable(sample_rows) -> None:
    config = ChartConfig(x_axis="A", y_axis="B", chart_type="radar")

    assert shape(sample_rows, config) == shape(sample_rows, config)
