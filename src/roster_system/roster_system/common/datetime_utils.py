from __future__ import annotations

import calendar
from datetime import date


def days_in_month(year: int, mes: int) -> int:
    """Number of days of a 0-based month index."""
    return calendar.monthrange(year, mes + 1)[1]


def weekday_of(year: int, mes: int, dia: int) -> int:
    """Weekday (0=Mon ... 6=Sun) of a grid cell."""
    return date(year, mes + 1, dia).weekday()


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()
