import math
from datetime import date
from typing import Any

NAN = float("nan")


def coerce_number(value: Any) -> float:
    """
    Convert a cell value to a float, or NaN when it is not a number.

    - None, dates and unknown types never count as numbers
    - bools count as 1 / 0
    - strings go through the plain decimal parse after stripping whitespace
    - inf / -inf are treated as failures so stats stay finite
    """
    if value is None or isinstance(value, date):
        return NAN

    if isinstance(value, (bool, int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return NAN
        try:
            number = float(text)
        except ValueError:
            return NAN
    else:
        # numpy scalars and Decimal land here
        try:
            number = float(value)
        except (TypeError, ValueError):
            return NAN

    if not math.isfinite(number):
        return NAN
    return number


def is_number(value: Any) -> bool:
    return not math.isnan(coerce_number(value))
