"""Review repository protocol."""

from typing import Protocol

from turtletrace.domain.models import DailyReview, WeeklyReview


class ReviewRepository(Protocol):
    """Interface for daily and weekly journal data access."""

    def load_daily(self) -> list[DailyReview]:
        """Load all daily reviews."""
        ...

    def save_daily(self, reviews: list[DailyReview]) -> None:
        """Replace the stored daily reviews."""
        ...

    def load_weekly(self) -> list[WeeklyReview]:
        """Load all weekly reviews."""
        ...

    def save_weekly(self, reviews: list[WeeklyReview]) -> None:
        """Replace the stored weekly reviews."""
        ...
