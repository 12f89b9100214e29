"""Display formatting for amounts and percents (French conventions)."""

from __future__ import annotations

import math
import re

# fr-FR groups thousands with a narrow no-break space and uses a decimal comma.
_THOUSANDS_SEP = "\u202f"


def _fr_number(value: float, max_decimals: int = 3) -> str:
    v = float(value)
    s = f"{v:,.{max_decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in ("-0", ""):
        s = "0"
    return s.replace(",", _THOUSANDS_SEP).replace(".", ",")


def format_currency(value: float) -> str:
    """``1234567`` -> ``"1\u202f234\u202f567"``."""
    return _fr_number(value)


def format_axis_value(value: float) -> str:
    """Compact axis label: thousands above 1 000 become ``"12k"``."""
    if value > 1000:
        return f"{value / 1000:.0f}k"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_percent_with_sign(value: float, decimals: int = 2) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{decimals}f}%"


def parse_number_input(value: str) -> float:
    """Parse a formatted number, ignoring any whitespace. Invalid input -> 0."""
    cleaned = re.sub(r"\s", "", str(value or ""))
    if not cleaned:
        return 0.0
    try:
        parsed = float(cleaned)
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(parsed) else parsed
