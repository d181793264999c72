"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of position trades."""

    BUY = "buy"
    SELL = "sell"


class AccountType(str, Enum):
    """Kinds of account a position can be filed under."""

    BROKER = "broker"
    STRATEGY = "strategy"
    FAMILY = "family"


class TagKind(str, Enum):
    """Tag collections attached to trades."""

    EMOTION = "emotion"
    REASON = "reason"
