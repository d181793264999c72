"""Trading journal review models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

DAILY_SECTIONS = (
    "market_data",
    "sector_data",
    "position_data",
    "dragon_tiger",
    "news_digest",
    "operations",
    "tomorrow_plan",
)

WEEKLY_SECTIONS = (
    "core_goals",
    "achievements",
    "resource_analysis",
    "market_rhythm",
    "next_week_strategy",
)


@dataclass
class DailyReview:
    """
    End-of-day journal entry, keyed by trading date.

    Section contents are free-form dictionaries; their shape is enforced
    by the API schemas rather than here.
    """

    review_id: str
    review_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sections: dict[str, Any] = field(default_factory=dict)
    summary: str = ""


@dataclass
class WeeklyReview:
    """Weekly journal entry, keyed by ISO week label (YYYY-Www)."""

    review_id: str
    week_label: str
    start_date: date
    end_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sections: dict[str, Any] = field(default_factory=dict)
    key_insight: str = ""
