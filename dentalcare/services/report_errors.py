# FILE: dentalcare/services/report_errors.py
from __future__ import annotations

from datetime import date


class ReportError(RuntimeError):
    pass


class InvalidRange(ReportError):
    """Raised when a report window starts after it ends."""

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: start {start} is after end {end}")


class DependencyFailure(ReportError):
    """A downstream query failed while building a report."""

    def __init__(self, query: str, cause: BaseException):
        self.query = query
        self.cause = cause
        super().__init__(f"{query} failed: {cause}")
