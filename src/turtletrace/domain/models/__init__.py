"""Domain models package."""

from turtletrace.domain.models.enums import TransactionType, AccountType, TagKind
from turtletrace.domain.models.position import Transaction, Position
from turtletrace.domain.models.account import (
    Account,
    AccountsState,
    ACCOUNT_COLORS,
    DEFAULT_ACCOUNT_NAME,
)
from turtletrace.domain.models.tag import Tag
from turtletrace.domain.models.review import (
    DailyReview,
    WeeklyReview,
    DAILY_SECTIONS,
    WEEKLY_SECTIONS,
)

__all__ = [
    "TransactionType",
    "AccountType",
    "TagKind",
    "Transaction",
    "Position",
    "Account",
    "AccountsState",
    "ACCOUNT_COLORS",
    "DEFAULT_ACCOUNT_NAME",
    "Tag",
    "DailyReview",
    "WeeklyReview",
    "DAILY_SECTIONS",
    "WEEKLY_SECTIONS",
]
