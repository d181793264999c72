"""Position repository protocol."""

from typing import Protocol

from turtletrace.domain.models import Position


class PositionRepository(Protocol):
    """Interface for position data access (whole-list read and replace)."""

    def load_all(self) -> list[Position]:
        """Load every position across all accounts."""
        ...

    def save_all(self, positions: list[Position]) -> None:
        """Replace the stored position list."""
        ...
