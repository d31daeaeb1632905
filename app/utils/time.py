from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from dateutil.parser import isoparse


def now_utc() -> datetime:
    """Current time as a naive UTC datetime (the form stored in the database)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return now_utc().date()


def to_naive_utc(ts: Any) -> Optional[datetime]:
    """Normalize an optional timestamp (string or datetime) to naive UTC.

    - None/empty -> None
    - naive values are assumed to already be UTC
    - aware values are converted to UTC and stripped of tzinfo
    """
    if ts is None or ts == "":
        return None

    dt = ts if isinstance(ts, datetime) else isoparse(str(ts).strip())
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def days_ago(days: int, ref: Optional[date] = None) -> date:
    return (ref or today()) - timedelta(days=days)
