"""
Integration tests for the SQLAlchemy collection store with SQLite.

Tests cover:
- Raw get/set/delete/keys on the collections table
- Repositories and services running on the SQLite store
- Data persistence across sessions
"""

from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from turtletrace.repositories.collections import (
    CollectionAccountRepository,
    CollectionPositionRepository,
    CollectionReviewRepository,
    CollectionTagRepository,
)
from turtletrace.repositories.sqlalchemy import SqlAlchemyCollectionStore
from turtletrace.services import AccountService, TagService
from turtletrace.domain.models import TagKind

from tests.conftest import make_position, sell


# =============================================================================
# STORE TESTS
# =============================================================================


class TestSqlAlchemyCollectionStore:

    def test_missing_key_returns_none(self, sqlite_store):
        assert sqlite_store.get("positions") is None

    def test_set_then_get(self, sqlite_store):
        sqlite_store.set("positions", '{"version": 2, "items": []}')

        assert sqlite_store.get("positions") == '{"version": 2, "items": []}'

    def test_set_overwrites(self, sqlite_store):
        sqlite_store.set("k", "one")
        sqlite_store.set("k", "two")

        assert sqlite_store.get("k") == "two"
        assert sqlite_store.keys() == ["k"]

    def test_delete(self, sqlite_store):
        sqlite_store.set("k", "v")

        sqlite_store.delete("k")
        sqlite_store.delete("k")

        assert sqlite_store.get("k") is None

    def test_keys_sorted(self, sqlite_store):
        for key in ("positions", "accounts", "emotion_tags"):
            sqlite_store.set(key, "{}")

        assert sqlite_store.keys() == ["accounts", "emotion_tags", "positions"]

    def test_unicode_payload(self, sqlite_store):
        sqlite_store.set("k", '{"name": "贵州茅台"}')

        assert "贵州茅台" in sqlite_store.get("k")


# =============================================================================
# REPOSITORY TESTS
# =============================================================================


class TestRepositoriesOnSqlite:

    def test_positions_persist_across_sessions(self, test_engine, sqlite_store):
        """
        GIVEN positions saved through one session
        WHEN a new session loads them
        THEN they come back with full transaction history
        """
        position = sell(make_position(), "1700", "40")
        CollectionPositionRepository(sqlite_store).save_all([position])

        other_session = sessionmaker(bind=test_engine)()
        try:
            loaded = CollectionPositionRepository(SqlAlchemyCollectionStore(other_session)).load_all()
        finally:
            other_session.close()

        assert len(loaded) == 1
        assert loaded[0].quantity == Decimal("60")
        assert len(loaded[0].transactions) == 2
        assert loaded[0].total_sell_amount == Decimal("68000")

    def test_account_bootstrap_on_sqlite(self, sqlite_store):
        service = AccountService(
            account_repo=CollectionAccountRepository(sqlite_store),
            position_repo=CollectionPositionRepository(sqlite_store),
        )

        state = service.initialize()

        assert len(state.accounts) == 1
        assert "accounts" in sqlite_store.keys()

    def test_tags_on_sqlite(self, sqlite_store):
        service = TagService(CollectionTagRepository(sqlite_store))

        service.add_tag(TagKind.EMOTION, "犹豫不决")

        assert len(service.list_tags(TagKind.EMOTION)) == 9
        assert sqlite_store.keys() == ["emotion_tags"]

    def test_empty_reviews_on_sqlite(self, sqlite_store):
        repo = CollectionReviewRepository(sqlite_store)

        assert repo.load_daily() == []
        assert repo.load_weekly() == []
