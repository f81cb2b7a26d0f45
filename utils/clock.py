from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from config.settings import settings


def local_now() -> datetime:
    """Current time in the municipality's zone; day rollover follows this clock."""
    return datetime.now(ZoneInfo(settings.LOCAL_TIMEZONE))


def local_today() -> date:
    return local_now().date()


def clock_label(ts: datetime) -> str:
    return ts.strftime("%I:%M %p")
