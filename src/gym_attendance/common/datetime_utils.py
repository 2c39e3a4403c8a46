from __future__ import annotations

import re
from datetime import date, datetime, time, timezone

from ..core.constants import DATE_KEY_FORMAT, DATE_KEY_PATTERN, MONTH_KEY_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse a zero-padded YYYY-MM-DD string into date."""
    if not re.fullmatch(DATE_KEY_PATTERN, value):
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond digits so the value survives DATETIME(3) unchanged."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (the format stored in MySQL).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return truncate_to_millis(datetime.now(timezone.utc).replace(tzinfo=None))


def date_key(value: datetime) -> str:
    return value.strftime(DATE_KEY_FORMAT)


def month_key(value: datetime) -> str:
    return value.strftime(MONTH_KEY_FORMAT)


def month_window(now: datetime) -> tuple[datetime, datetime]:
    """Half-open [start, end) bounds of the calendar month containing ``now``."""
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1)
    else:
        end = datetime(now.year, now.month + 1, 1)
    return start, end


def start_of_year(now: datetime) -> datetime:
    return datetime(now.year, 1, 1)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    # 23:59:59.999, the precision of DATETIME(3)
    return datetime.combine(day, time(23, 59, 59, 999000))


def to_iso_utc(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"
