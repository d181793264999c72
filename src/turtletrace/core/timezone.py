"""Timezone and calendar utilities for A-share market time (Asia/Shanghai)."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

import pytz
from dateutil import parser as date_parser

MARKET_TZ = pytz.timezone("Asia/Shanghai")

_WEEK_LABEL_RE = re.compile(r"^(\d{4})-W(\d{2})$")


def now_market() -> datetime:
    """Return current time in the market timezone."""
    return datetime.now(MARKET_TZ)


def today_market() -> date:
    """Return today's date in the market timezone."""
    return now_market().date()


def to_market(dt: datetime) -> datetime:
    """Convert a datetime to the market timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already market time
        return MARKET_TZ.localize(dt)
    return dt.astimezone(MARKET_TZ)


def parse_datetime_market(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in the market timezone.

    If no timezone is provided in the string, assumes market time.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or MARKET_TZ
        dt = tz.localize(dt)
    return to_market(dt)


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a date."""
    return date_parser.isoparse(value).date()


def week_label_for(day: date) -> str:
    """Return the ISO week label (YYYY-Www) containing ``day``."""
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def week_range(week_label: str) -> tuple[date, date]:
    """
    Return the Monday and Sunday bounding an ISO week label.

    Raises:
        ValueError: If the label is not of the form YYYY-Www or names a
            week that does not exist in that ISO year.
    """
    match = _WEEK_LABEL_RE.match(week_label)
    if not match:
        raise ValueError(f"Invalid week label: {week_label}")
    year, week = int(match.group(1)), int(match.group(2))
    start = date.fromisocalendar(year, week, 1)
    return start, start + timedelta(days=6)


def current_week_label() -> str:
    """Return the ISO week label for today in market time."""
    return week_label_for(today_market())
