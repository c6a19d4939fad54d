"""Parsing and display of shopping-list quantities."""

import math
import re
from decimal import Decimal
from typing import Any, Optional

# Leading numeric prefix, so "2.5 cups" reads as 2.5 and "abc" does not parse.
_AMOUNT_RE = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def parse_amount(value: Any) -> Optional[float]:
    """Parse a stored or posted amount. Returns None when it is not a usable number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _AMOUNT_RE.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def format_amount(amount: float) -> str:
    """
    Plain decimal text for an amount, no exponent and no trailing zeros:
    3.0 -> "3", 0.125 -> "0.125", 1e-05 -> "0.00001".
    Uses the shortest repr of the float, so parse_amount(format_amount(x)) == x.
    """
    if not math.isfinite(amount):
        return "0"
    text = format(Decimal(repr(float(amount))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
