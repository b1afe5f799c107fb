"""
Byte size formatting and unit conversion helpers.

These are formatting helpers, not validators: unknown units degrade to a
fallback value instead of raising.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Union

UNITS: List[str] = ["B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")


def _format_number(value: float, precision: int) -> str:
    """Round half-up and drop trailing zeros ("1.50" -> "1.5", "1.00" -> "1")."""
    quantum = Decimal(1).scaleb(-precision)
    text = format(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_bytes(size: int, precision: int = 2) -> str:
    """
    Format a byte count as "<value> <unit>".

    Examples:
        format_bytes(0) -> "0 B"
        format_bytes(1024) -> "1 KB"
        format_bytes(1536, 1) -> "1.5 KB"
    """
    size = max(int(size), 0)

    # floor(log1024(size)) on integers, zero maps to B
    power = 0
    while power < len(UNITS) - 1 and size >= 1024 ** (power + 1):
        power += 1

    return f"{_format_number(size / 1024 ** power, precision)} {UNITS[power]}"


def to_bytes(value: str) -> Union[int, float, str]:
    """
    Convert "<number><KB..YB>" to bytes.

    The input comes back unchanged when the two-letter suffix is not a known
    unit, e.g. to_bytes("5XY") == "5XY".
    """
    suffix = value[-2:].upper()
    if suffix not in UNITS[1:]:
        return value

    match = _NUMERIC_PREFIX.match(value[:-2])
    number = float(match.group(1)) if match else 0.0

    result = number * 1024 ** UNITS.index(suffix)
    return int(result) if result.is_integer() else result


def from_bytes(size: int, to: str = "MB", decimal_places: int = 2) -> str:
    """
    Express a byte count in the given unit, e.g. from_bytes(1048576, "KB") == "1,024.00KB".

    Returns "0<unit>" when the unit is not on the ladder.
    """
    if to not in UNITS:
        return f"0{to}"
    return f"{size / 1024 ** UNITS.index(to):,.{decimal_places}f}{to}"
