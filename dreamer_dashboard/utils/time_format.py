"""Relative timestamps for the recent-documents list ("2m ago", "3h ago")."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_MINUTE = 60
_HOUR = 3600
_DAY = 86400
_ONE_SECOND = timedelta(seconds=1)
# fromisoformat before 3.11 only takes 3 or 6 fractional digits.
_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Parse an ISO-8601 string into an aware datetime.

    Naive values are taken as UTC.  A trailing ``Z`` and any number of
    fractional-second digits (truncated to microseconds) are accepted on
    every supported Python version.  Empty input yields ``None``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_relative_time(timestamp: datetime | str | None, now: datetime) -> str:
    """Describe how long before *now* the *timestamp* lies.

    Parameters
    ----------
    timestamp:
        ISO-8601 string or datetime.  Empty or ``None`` gives ``""``.
    now:
        Reference instant.  Always passed in so output is deterministic.

    Returns
    -------
    str
        ``"just now"`` under a minute, ``"{n}m ago"`` under an hour,
        ``"{n}h ago"`` under a day, else the timestamp's calendar date in
        the current locale's date representation (``%x``).
    """
    moment = parse_timestamp(timestamp)
    if moment is None:
        return ""

    reference = parse_timestamp(now)
    # floor() of the difference; timedelta // timedelta floors toward -inf.
    diff = (reference - moment) // _ONE_SECOND

    if diff < _MINUTE:
        return "just now"
    if diff < _HOUR:
        return f"{diff // _MINUTE}m ago"
    if diff < _DAY:
        return f"{diff // _HOUR}h ago"
    return moment.date().strftime("%x")
