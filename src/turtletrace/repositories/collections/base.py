"""Shared load/save plumbing for JSON collections kept in a CollectionStore."""

import json
import logging
from decimal import InvalidOperation
from typing import Any, Callable, Optional, TypeVar

from turtletrace.core.timezone import now_market
from turtletrace.repositories.protocols import CollectionStore
from turtletrace.repositories.schema import MigrationResult, MigrationStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNREADABLE_SUFFIX = ".unreadable"


class JsonCollectionRepository:
    """
    Base class for repositories that keep whole collections as JSON blobs.

    Loading runs the collection's schema migrations. Migrated documents are
    written back immediately. An unreadable blob is copied aside under
    ``<key>.unreadable`` (or a timestamped ``<key>.unreadable.<time>`` when
    an earlier copy is already there), logged, and the collection is
    treated as empty.
    """

    def __init__(self, store: CollectionStore):
        self._store = store

    def _load(
        self,
        key: str,
        migrate: Callable[[Optional[str]], MigrationResult],
        decode: Callable[[dict[str, Any]], T],
    ) -> T:
        raw = self._store.get(key)
        result = migrate(raw)

        if result.status != MigrationStatus.UNREADABLE:
            try:
                value = decode(result.document)
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                result = MigrationResult(
                    MigrationStatus.UNREADABLE,
                    from_version=result.from_version,
                    error=f"cannot decode: {e!r}",
                )

        if result.status == MigrationStatus.UNREADABLE:
            logger.error(
                "Collection '%s' is unreadable (%s); treating it as empty",
                key,
                result.error,
            )
            self._set_aside(key, raw)
            result = migrate(None)
            value = decode(result.document)

        if result.needs_write:
            logger.info(
                "Migrated collection '%s' from schema version %s",
                key,
                result.from_version,
            )
            self._store.set(key, json.dumps(result.document, ensure_ascii=False))

        return value

    def _set_aside(self, key: str, raw: Optional[str]) -> None:
        if raw is None:
            return
        aside_key = key + UNREADABLE_SUFFIX
        if self._store.get(aside_key) is not None:
            # Earlier copies are never overwritten
            aside_key = f"{aside_key}.{now_market().strftime('%Y%m%dT%H%M%S%f')}"
        self._store.set(aside_key, raw)
        self._store.delete(key)
