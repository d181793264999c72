"""Review service for the daily and weekly trading journal."""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from turtletrace.core.exceptions import NotFoundError, ValidationError
from turtletrace.core.timezone import current_week_label, now_market, week_range
from turtletrace.domain.models import (
    DAILY_SECTIONS,
    WEEKLY_SECTIONS,
    DailyReview,
    WeeklyReview,
)
from turtletrace.repositories.protocols import ReviewRepository

logger = logging.getLogger(__name__)


def _check_sections(sections: dict, allowed: tuple[str, ...]) -> None:
    unknown = sorted(set(sections) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown review sections: {', '.join(unknown)}")


class ReviewService:
    """
    Service for journal entries.

    Daily reviews are keyed by date and weekly reviews by ISO week label;
    saving an existing key overwrites it. Lists are kept newest first.
    """

    def __init__(self, review_repo: ReviewRepository):
        self._review_repo = review_repo

    # -------------------------------------------------------------------------
    # Daily
    # -------------------------------------------------------------------------

    def list_reviews(self) -> list[DailyReview]:
        return self._review_repo.load_daily()

    def list_reviews_in_range(self, start: date, end: date) -> list[DailyReview]:
        """Daily reviews dated within ``start``..``end`` inclusive."""
        if start > end:
            raise ValidationError("Range start must not be after range end")
        return [r for r in self.list_reviews() if start <= r.review_date <= end]

    def find_review(self, review_date: date) -> Optional[DailyReview]:
        for review in self.list_reviews():
            if review.review_date == review_date:
                return review
        return None

    def get_review(self, review_date: date) -> DailyReview:
        review = self.find_review(review_date)
        if review is None:
            raise NotFoundError("Daily review", review_date.isoformat())
        return review

    def save_review(self, review: DailyReview) -> DailyReview:
        """Insert or overwrite the review for its date."""
        _check_sections(review.sections, DAILY_SECTIONS)
        reviews = self.list_reviews()
        existing = next((r for r in reviews if r.review_date == review.review_date), None)

        now = now_market()
        saved = replace(
            review,
            review_id=review.review_date.isoformat(),
            created_at=(existing.created_at if existing else None) or review.created_at or now,
            updated_at=now,
        )
        reviews = [r for r in reviews if r.review_date != review.review_date]
        reviews.append(saved)
        reviews.sort(key=lambda r: r.review_date, reverse=True)
        self._review_repo.save_daily(reviews)
        logger.info("Saved daily review %s", saved.review_id)
        return saved

    def delete_review(self, review_date: date) -> None:
        reviews = self.list_reviews()
        remaining = [r for r in reviews if r.review_date != review_date]
        if len(remaining) == len(reviews):
            raise NotFoundError("Daily review", review_date.isoformat())
        self._review_repo.save_daily(remaining)

    def duplicate_review(self, from_date: date, to_date: date) -> DailyReview:
        """Copy a review's content to another date, replacing anything there."""
        source = self.get_review(from_date)
        copy = replace(
            source,
            review_id=to_date.isoformat(),
            review_date=to_date,
            created_at=None,
            sections=dict(source.sections),
        )
        return self.save_review(copy)

    def initialize_review(self, review_date: date) -> DailyReview:
        """Return the stored review for the date, or a fresh unsaved one."""
        existing = self.find_review(review_date)
        if existing:
            return existing
        now = now_market()
        return DailyReview(
            review_id=review_date.isoformat(),
            review_date=review_date,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------------
    # Weekly
    # -------------------------------------------------------------------------

    def list_weekly_reviews(self) -> list[WeeklyReview]:
        return self._review_repo.load_weekly()

    def list_weekly_reviews_by_year(self, year: int) -> list[WeeklyReview]:
        prefix = f"{year}-"
        return [r for r in self.list_weekly_reviews() if r.week_label.startswith(prefix)]

    def find_weekly_review(self, week_label: str) -> Optional[WeeklyReview]:
        for review in self.list_weekly_reviews():
            if review.week_label == week_label:
                return review
        return None

    def get_weekly_review(self, week_label: str) -> WeeklyReview:
        review = self.find_weekly_review(week_label)
        if review is None:
            raise NotFoundError("Weekly review", week_label)
        return review

    def save_weekly_review(self, review: WeeklyReview) -> WeeklyReview:
        """Insert or overwrite the review for its week; dates follow the label."""
        start, end = self._week_range(review.week_label)
        _check_sections(review.sections, WEEKLY_SECTIONS)
        reviews = self.list_weekly_reviews()
        existing = next((r for r in reviews if r.week_label == review.week_label), None)

        now = now_market()
        saved = replace(
            review,
            review_id=review.week_label,
            start_date=start,
            end_date=end,
            created_at=(existing.created_at if existing else None) or review.created_at or now,
            updated_at=now,
        )
        reviews = [r for r in reviews if r.week_label != review.week_label]
        reviews.append(saved)
        reviews.sort(key=lambda r: r.week_label, reverse=True)
        self._review_repo.save_weekly(reviews)
        logger.info("Saved weekly review %s", saved.week_label)
        return saved

    def delete_weekly_review(self, week_label: str) -> None:
        reviews = self.list_weekly_reviews()
        remaining = [r for r in reviews if r.week_label != week_label]
        if len(remaining) == len(reviews):
            raise NotFoundError("Weekly review", week_label)
        self._review_repo.save_weekly(remaining)

    def initialize_weekly_review(self, week_label: Optional[str] = None) -> WeeklyReview:
        """Return the stored review for the week (default: this week), or a fresh unsaved one."""
        label = week_label or current_week_label()
        existing = self.find_weekly_review(label)
        if existing:
            return existing
        start, end = self._week_range(label)
        now = now_market()
        return WeeklyReview(
            review_id=label,
            week_label=label,
            start_date=start,
            end_date=end,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def _week_range(week_label: str) -> tuple[date, date]:
        try:
            return week_range(week_label)
        except ValueError as e:
            raise ValidationError(str(e)) from e
