"""Repositories that keep whole JSON collections in a CollectionStore."""

from turtletrace.repositories.collections.base import JsonCollectionRepository, UNREADABLE_SUFFIX
from turtletrace.repositories.collections.position_repo import (
    CollectionPositionRepository,
    POSITIONS_KEY,
)
from turtletrace.repositories.collections.account_repo import (
    CollectionAccountRepository,
    ACCOUNTS_KEY,
)
from turtletrace.repositories.collections.review_repo import (
    CollectionReviewRepository,
    DAILY_REVIEWS_KEY,
    WEEKLY_REVIEWS_KEY,
)
from turtletrace.repositories.collections.tag_repo import CollectionTagRepository, TAG_KEYS

__all__ = [
    "JsonCollectionRepository",
    "UNREADABLE_SUFFIX",
    "CollectionPositionRepository",
    "POSITIONS_KEY",
    "CollectionAccountRepository",
    "ACCOUNTS_KEY",
    "CollectionReviewRepository",
    "DAILY_REVIEWS_KEY",
    "WEEKLY_REVIEWS_KEY",
    "CollectionTagRepository",
    "TAG_KEYS",
]
