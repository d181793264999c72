"""Tag repository protocol."""

from typing import Protocol, Optional

from turtletrace.domain.models import Tag, TagKind


class TagRepository(Protocol):
    """Interface for emotion and reason tag data access."""

    def load(self, kind: TagKind) -> Optional[list[Tag]]:
        """Load tags of one kind, or None if that collection was never written."""
        ...

    def save(self, kind: TagKind, tags: list[Tag]) -> None:
        """Replace the stored tags of one kind."""
        ...
