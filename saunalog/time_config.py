"""Application timezone and day-key helpers."""
import os
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

# Day keys are computed in this zone
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Tokyo")


def get_app_tz() -> ZoneInfo:
    """Get the application timezone."""
    return ZoneInfo(APP_TIMEZONE)


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime. Use this instead of datetime.now()."""
    return datetime.now(timezone.utc)


def today_key(now: Optional[datetime] = None) -> str:
    """Return the YYYY-MM-DD key of the current day in the app's timezone.

    Naive datetimes are assumed to be UTC.
    """
    if now is None:
        now = utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(get_app_tz()).date().isoformat()
