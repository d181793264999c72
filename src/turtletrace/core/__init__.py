"""Core utilities and shared functionality."""

from turtletrace.core.timezone import (
    now_market,
    today_market,
    to_market,
    parse_datetime_market,
    parse_date,
    week_label_for,
    week_range,
    current_week_label,
    MARKET_TZ,
)
from turtletrace.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientSharesError,
    DuplicatePositionError,
    QuoteNotFoundError,
    DefaultAccountDeletionError,
)

__all__ = [
    "now_market",
    "today_market",
    "to_market",
    "parse_datetime_market",
    "parse_date",
    "week_label_for",
    "week_range",
    "current_week_label",
    "MARKET_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientSharesError",
    "DuplicatePositionError",
    "QuoteNotFoundError",
    "DefaultAccountDeletionError",
]
