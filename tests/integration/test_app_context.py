"""
Integration tests for AppContext against a temporary data directory.

Tests cover:
- Initialization creates the database and the default account
- Services wired over one SQLite file, using the stub quote source
- Reinitialization picks up persisted data
"""

from decimal import Decimal

import pytest

from turtletrace.app_context import AppContext
from turtletrace.config.settings import reset_settings
from turtletrace.domain.models import DEFAULT_ACCOUNT_NAME
from turtletrace.repositories.sqlalchemy.database import reset_database
from turtletrace.services import PositionOpen

from tests.conftest import run


@pytest.fixture
def context(tmp_path):
    ctx = AppContext(data_dir=tmp_path)
    ctx.initialize()
    yield ctx
    ctx.close()
    reset_database()
    reset_settings()


class TestAppContext:

    def test_initialize_creates_database_and_default_account(self, context, tmp_path):
        assert context.is_initialized
        assert (tmp_path / "turtletrace.db").exists()
        assert [a.name for a in context.accounts.list_accounts()] == [DEFAULT_ACCOUNT_NAME]

    def test_services_share_storage(self, context):
        """
        GIVEN an initialized context with the stub quote source
        WHEN a position is opened through the ledger
        THEN analysis and backup see it
        """
        run(context.ledger.open_position(
            PositionOpen(symbol="600519.SH", price=Decimal("1680.00"), quantity=Decimal("100"))
        ))

        summary = context.analysis.summary()
        assert Decimal(summary.total_profit) == Decimal("800.00")
        assert len(context.backup.export_data()["positions"]) == 1
        assert "600519.SH" in context.csv_exporter.render()

    def test_reinitialize_keeps_data(self, context, tmp_path):
        run(context.ledger.open_position(
            PositionOpen(symbol="000858.SZ", price=Decimal("140"), quantity=Decimal("200"))
        ))

        context.initialize(tmp_path)

        assert [p.symbol for p in context.ledger.list_positions()] == ["000858.SZ"]
        assert len(context.accounts.list_accounts()) == 1

    def test_refresh_session_resets_services(self, context):
        ledger = context.ledger

        context.refresh_session()

        assert context.ledger is not ledger
