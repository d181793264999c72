"""CollectionStore-backed TagRepository."""

from typing import Optional

from turtletrace.domain.models import Tag, TagKind
from turtletrace.repositories.codec import tag_from_dict, tag_to_dict
from turtletrace.repositories.collections.base import JsonCollectionRepository
from turtletrace.repositories.schema import ITEMS_VERSION, dump_document, migrate_items

TAG_KEYS = {
    TagKind.EMOTION: "emotion_tags",
    TagKind.REASON: "reason_tags",
}


class CollectionTagRepository(JsonCollectionRepository):
    """Stores emotion tags and reason tags under separate keys."""

    def load(self, kind: TagKind) -> Optional[list[Tag]]:
        key = TAG_KEYS[kind]
        if self._store.get(key) is None:
            return None
        return self._load(
            key,
            migrate_items,
            lambda doc: [tag_from_dict(item) for item in doc["items"]],
        )

    def save(self, kind: TagKind, tags: list[Tag]) -> None:
        self._store.set(
            TAG_KEYS[kind],
            dump_document(ITEMS_VERSION, items=[tag_to_dict(t) for t in tags]),
        )
