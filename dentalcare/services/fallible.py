# FILE: dentalcare/services/fallible.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dentalcare.services.report_errors import DependencyFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Fallible(Generic[T]):
    """
    Outcome of a query whose failure the caller is allowed to absorb.

    Only database errors are captured; programming errors still raise.
    """
    value: Optional[T] = None
    error: Optional[DependencyFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, fallback: T) -> T:
        if self.error is not None:
            logger.warning("%s; falling back to %r", self.error, fallback)
            return fallback
        return self.value


def attempt(query: str, fn: Callable[[], T], db: Optional[Session] = None) -> Fallible[T]:
    """
    Run fn, capturing database errors. When db is given it is rolled back
    on failure so later queries in the same request can still run.
    """
    try:
        return Fallible(value=fn())
    except SQLAlchemyError as exc:
        if db is not None:
            db.rollback()
        return Fallible(error=DependencyFailure(query, exc))
