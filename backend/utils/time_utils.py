"""
Relative time formatting
"""

from datetime import datetime, timezone
from typing import Optional

# (unit, seconds) from largest to smallest
_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def diff_for_humans(timestamp: float, now: Optional[datetime] = None) -> str:
    """
    Describe a Unix timestamp relative to now, e.g. "3 hours ago" or "2 days from now".
    """
    now = now or datetime.now(timezone.utc)
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    delta = int((now - moment).total_seconds())

    suffix = "ago" if delta >= 0 else "from now"
    delta = abs(delta)

    for unit, seconds in _UNITS:
        if delta >= seconds:
            count = delta // seconds
            break
    else:
        unit, count = "second", 0

    if count == 0:
        return "just now"

    plural = "" if count == 1 else "s"
    return f"{count} {unit}{plural} {suffix}"
