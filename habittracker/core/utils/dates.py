"""Calendar date helpers.

Completion dates travel as ``YYYY-MM-DD`` strings; the engine works on
``datetime.date`` values and converts at the edges.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Union

DateLike = Union[date, str]
Clock = Callable[[], date]


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def to_iso(value: DateLike) -> str:
    return to_date(value).isoformat()


def local_today() -> date:
    """Today's date on the server's local clock."""
    return date.today()


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
