"""Repository protocol definitions (interfaces)."""

from turtletrace.repositories.protocols.collection_store import CollectionStore
from turtletrace.repositories.protocols.position_repo import PositionRepository
from turtletrace.repositories.protocols.account_repo import AccountRepository
from turtletrace.repositories.protocols.review_repo import ReviewRepository
from turtletrace.repositories.protocols.tag_repo import TagRepository

__all__ = [
    "CollectionStore",
    "PositionRepository",
    "AccountRepository",
    "ReviewRepository",
    "TagRepository",
]
