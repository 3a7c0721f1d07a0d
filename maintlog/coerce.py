"""Parsing of raw form and command-line input into store values.

Numbers are forgiving: anything that is not a usable non-negative number
becomes 0. Required-field checks happen later, in the store.
"""

import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_mileage(raw: Any) -> int:
    """Leading integer of raw, or 0 when missing, non-numeric or negative."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        value = int(raw)
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return 0
        value = int(match.group(1))
    return max(value, 0)


def parse_cost(raw: Any) -> float:
    """Cost as a float, or 0.0 when missing, non-numeric or negative."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(str(raw).strip().lstrip("$").replace(",", ""))
    except ValueError:
        return 0.0
    if value != value or value < 0:  # NaN
        return 0.0
    return value

