"""Parsing of --expired time expressions.

Accepted forms:

    ""              no expiry check (None)
    now             the current moment
    now-1d          one day ago
    now+1h30m       ninety minutes from now
    now-1d12h       a day and a half ago; a sign applies until the next sign
    2024-01-31T12:00:00Z   an absolute RFC 3339 / ISO 8601 timestamp
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from gl_tagger.exceptions import TimeExpressionError

_TERM = re.compile(r"([+-]?)(\d+(?:\.\d+)?)(ns|us|µs|ms|mo|s|m|h|d|w|y)")

_UNITS = {
    "ns": lambda n: timedelta(microseconds=n / 1000),
    "us": lambda n: timedelta(microseconds=n),
    "µs": lambda n: timedelta(microseconds=n),
    "ms": lambda n: timedelta(milliseconds=n),
    "s": lambda n: timedelta(seconds=n),
    "m": lambda n: timedelta(minutes=n),
    "h": lambda n: timedelta(hours=n),
    "d": lambda n: timedelta(days=n),
    "w": lambda n: timedelta(weeks=n),
    "mo": lambda n: relativedelta(months=n),
    "y": lambda n: relativedelta(years=n),
}

_CALENDAR_UNITS = {"mo", "y"}


def apply_duration(base: datetime, duration: str) -> datetime:
    """Shift ``base`` by a duration such as ``-1d12h`` or ``+2w``."""
    result = base
    sign = 1
    pos = 0
    while pos < len(duration):
        match = _TERM.match(duration, pos)
        if not match:
            raise TimeExpressionError(f"Invalid duration {duration!r} at position {pos}")
        if match.group(1):
            sign = -1 if match.group(1) == "-" else 1
        unit = match.group(3)
        if unit in _CALENDAR_UNITS:
            if "." in match.group(2):
                raise TimeExpressionError(f"Fractional {unit!r} is not supported in {duration!r}")
            amount = int(match.group(2))
        else:
            amount = float(match.group(2))
        delta = _UNITS[unit](amount)
        result = result + delta if sign > 0 else result - delta
        pos = match.end()
    return result


def parse_time_expression(expr: str | None, now: datetime | None = None) -> datetime | None:
    """Turn an --expired value into an aware datetime, or None when empty."""
    expr = (expr or "").strip()
    if not expr:
        return None
    if now is None:
        now = datetime.now(timezone.utc)

    if expr.startswith("now"):
        return apply_duration(now, expr[3:])

    try:
        moment = isoparse(expr)
    except ValueError as e:
        raise TimeExpressionError(f"Invalid time expression {expr!r}: {e}") from None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment
