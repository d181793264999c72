"""CollectionStore-backed PositionRepository."""

from turtletrace.domain.models import Position
from turtletrace.repositories.codec import position_from_dict, position_to_dict
from turtletrace.repositories.collections.base import JsonCollectionRepository
from turtletrace.repositories.schema import (
    POSITIONS_VERSION,
    dump_document,
    migrate_positions,
)

POSITIONS_KEY = "positions"


class CollectionPositionRepository(JsonCollectionRepository):
    """Stores every position, across all accounts, as one versioned list."""

    def load_all(self) -> list[Position]:
        return self._load(
            POSITIONS_KEY,
            migrate_positions,
            lambda doc: [position_from_dict(item) for item in doc["items"]],
        )

    def save_all(self, positions: list[Position]) -> None:
        self._store.set(
            POSITIONS_KEY,
            dump_document(
                POSITIONS_VERSION,
                items=[position_to_dict(p) for p in positions],
            ),
        )
