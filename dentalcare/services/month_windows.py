# FILE: dentalcare/services/month_windows.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Iterator, Tuple, TypeVar

from dentalcare.services.report_errors import InvalidRange

T = TypeVar("T")

# inclusive upper bound used by every timestamp window
END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class MonthWindow:
    label: str  # "YYYY-MM"
    start: date
    end: date  # last calendar day of the month

    def bounds(self) -> Tuple[datetime, datetime]:
        return day_bounds(self.start, self.end)

    def contains(self, ts: datetime) -> bool:
        lo, hi = self.bounds()
        return lo <= ts <= hi


def day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """
    Convert an inclusive date range into inclusive timestamps:
    start at 00:00:00, end at 23:59:59.
    """
    return datetime.combine(start, time.min), datetime.combine(end, END_OF_DAY)


def month_end(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    idx = d.year * 12 + (d.month - 1) + months
    year, month = divmod(idx, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def check_range(start: date, end: date) -> None:
    if start > end:
        raise InvalidRange(start, end)


def iter_month_windows(start: date, end: date) -> Iterator[MonthWindow]:
    """
    Yield one window per calendar month intersecting [start, end].

    Boundary months are returned whole (1st .. last day), so a range
    inside a single month yields exactly one window.
    """
    check_range(start, end)
    return _month_windows(start.replace(day=1), end.replace(day=1))


def _month_windows(current: date, last: date) -> Iterator[MonthWindow]:
    while True:
        yield MonthWindow(
            label=current.strftime("%Y-%m"),
            start=current,
            end=month_end(current),
        )
        # stop before stepping; December 9999 has no successor
        if current >= last:
            return
        current = add_months(current, 1)


def monthly_trend(
    start: date,
    end: date,
    aggregate: Callable[[MonthWindow], T],
) -> Iterator[Tuple[str, T]]:
    """
    Lazily yield (month label, aggregate(window)) for every month in range.
    The range is validated on call, before anything is aggregated.
    """
    windows = iter_month_windows(start, end)
    return ((w.label, aggregate(w)) for w in windows)
