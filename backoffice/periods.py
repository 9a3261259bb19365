# -*- coding: utf-8 -*-
from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .errors import InvalidInput, InvalidPeriod

MIN_YEAR, MAX_YEAR = 2000, 2100


@dataclass(frozen=True)
class DateRange:
    """Calendar-day window, both ends inclusive."""

    start: date
    end: date

    def __contains__(self, day) -> bool:
        return self.start <= _to_date(day) <= self.end

    def days(self) -> int:
        return (self.end - self.start).days + 1


def _to_date(x) -> date:
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    y, m, d = map(int, str(x)[:10].split("-"))
    return date(y, m, d)


def month_range(year, month) -> DateRange:
    """First through last calendar day of the month."""
    try:
        y, m = int(year), int(month)
    except (TypeError, ValueError):
        raise InvalidPeriod("year and month are required (month 1..12)", year=year, month=month)
    if not (MIN_YEAR <= y <= MAX_YEAR) or not (1 <= m <= 12):
        raise InvalidPeriod("year and month are required (month 1..12)", year=y, month=m)
    last = monthrange(y, m)[1]
    return DateRange(date(y, m, 1), date(y, m, last))


def day_range(day) -> DateRange:
    d = _to_date(day)
    return DateRange(d, d)


def business_today(tz_name: str) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def parse_date_iso(value, *, default: date | None = None, field: str = "date") -> date:
    """``YYYY-MM-DD`` (a longer ISO timestamp is cut to its date part)."""
    if value is None or str(value).strip() == "":
        if default is not None:
            return default
        raise InvalidInput(f"{field} is required (YYYY-MM-DD)", field=field)
    try:
        return _to_date(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidInput(f"invalid {field} format, expected YYYY-MM-DD", field=field, value=str(value))


def parse_ym(value: str) -> tuple[int, int]:
    """``"2025-11"`` -> ``(2025, 11)``."""
    try:
        y, m = map(int, str(value).split("-"))
    except ValueError:
        raise InvalidPeriod("expected YYYY-MM", value=str(value))
    month_range(y, m)
    return y, m
