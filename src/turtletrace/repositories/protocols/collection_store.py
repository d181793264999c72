"""Collection store protocol."""

from typing import Protocol, Optional


class CollectionStore(Protocol):
    """
    Interface for a string-keyed blob store.

    Each key holds one serialized collection that is always read and
    replaced as a whole; stores never perform partial updates.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored blob for ``key``, or None if never written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the blob stored under ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...
