# issuefilter/clock.py
"""Process-wide "current time" used by time-relative qualifiers.

Evaluation entry points accept an explicit ``now``; when it is omitted they
fall back to :func:`current_time`, which returns the wall clock unless a fixed
instant has been installed with :func:`set_current_time`.
"""

import threading
from datetime import datetime

_lock = threading.Lock()
_current_time: datetime | None = None


def current_time() -> datetime:
    with _lock:
        override = _current_time
    return override if override is not None else datetime.now()


def set_current_time(value: datetime | None) -> None:
    """Pin the current time to ``value`` (``None`` restores the wall clock)."""
    global _current_time
    with _lock:
        _current_time = value


def reset_current_time() -> None:
    set_current_time(None)


def hours_between(start: datetime, end: datetime) -> int:
    """Whole hours from ``start`` to ``end``, truncated toward zero.

    Naive datetimes are taken as local time when compared with aware ones.
    """
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.astimezone()
        end = end.astimezone()
    return int((end - start).total_seconds() / 3600)
