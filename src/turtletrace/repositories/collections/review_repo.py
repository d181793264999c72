"""CollectionStore-backed ReviewRepository."""

from turtletrace.domain.models import DailyReview, WeeklyReview
from turtletrace.repositories.codec import (
    daily_review_from_dict,
    daily_review_to_dict,
    weekly_review_from_dict,
    weekly_review_to_dict,
)
from turtletrace.repositories.collections.base import JsonCollectionRepository
from turtletrace.repositories.schema import ITEMS_VERSION, dump_document, migrate_items

DAILY_REVIEWS_KEY = "daily_reviews"
WEEKLY_REVIEWS_KEY = "weekly_reviews"


class CollectionReviewRepository(JsonCollectionRepository):
    """Stores daily and weekly reviews as two independent collections."""

    def load_daily(self) -> list[DailyReview]:
        return self._load(
            DAILY_REVIEWS_KEY,
            migrate_items,
            lambda doc: [daily_review_from_dict(item) for item in doc["items"]],
        )

    def save_daily(self, reviews: list[DailyReview]) -> None:
        self._store.set(
            DAILY_REVIEWS_KEY,
            dump_document(ITEMS_VERSION, items=[daily_review_to_dict(r) for r in reviews]),
        )

    def load_weekly(self) -> list[WeeklyReview]:
        return self._load(
            WEEKLY_REVIEWS_KEY,
            migrate_items,
            lambda doc: [weekly_review_from_dict(item) for item in doc["items"]],
        )

    def save_weekly(self, reviews: list[WeeklyReview]) -> None:
        self._store.set(
            WEEKLY_REVIEWS_KEY,
            dump_document(ITEMS_VERSION, items=[weekly_review_to_dict(r) for r in reviews]),
        )
