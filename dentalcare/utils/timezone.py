# FILE: dentalcare/utils/timezone.py
from __future__ import annotations

from datetime import datetime, date
from zoneinfo import ZoneInfo

from dentalcare.core.config import settings

CLINIC_TZ = ZoneInfo(settings.CLINIC_TIMEZONE)


def now_local() -> datetime:
    """
    Returns a *naive* datetime representing clinic-local time.
    DateTime columns are naive, so timestamps are stored without tzinfo.
    """
    return datetime.now(CLINIC_TZ).replace(tzinfo=None)


def today_local() -> date:
    return now_local().date()
