"""
Unit tests for BackupService.

Tests cover:
- Export of positions, summary and accounts
- Import with validation, account restore and default-account fallback
"""

import json
from dataclasses import replace
from decimal import Decimal

import pytest

from turtletrace.core.exceptions import ValidationError
from turtletrace.repositories.collections import (
    CollectionAccountRepository,
    CollectionPositionRepository,
)
from turtletrace.repositories.codec import position_to_dict
from turtletrace.repositories.memory import InMemoryCollectionStore
from turtletrace.services import BackupService
from turtletrace.services.backup_service import BACKUP_VERSION, validate_position

from tests.conftest import buy, make_position, sell


@pytest.fixture
def fresh_backup_service():
    """Backup service over a second, empty store."""
    store = InMemoryCollectionStore()
    return BackupService(
        position_repo=CollectionPositionRepository(store),
        account_repo=CollectionAccountRepository(store),
    ), store


# =============================================================================
# EXPORT TESTS
# =============================================================================


class TestExport:

    def test_full_export_contains_accounts(
        self, backup_service, position_repo, default_account, second_account
    ):
        position_repo.save_all([make_position(account_id=default_account.account_id)])

        data = backup_service.export_data()

        assert data["version"] == BACKUP_VERSION
        assert len(data["positions"]) == 1
        assert len(data["accounts"]["accounts"]) == 2
        assert data["summary"]["total_cost"] == "168050.00"

    def test_account_export_filters_positions(
        self, backup_service, position_repo, default_account, second_account
    ):
        position_repo.save_all([
            make_position(account_id=default_account.account_id),
            make_position(symbol="000858.SZ", account_id=second_account.account_id),
        ])

        data = backup_service.export_data(second_account.account_id)

        assert [p["symbol"] for p in data["positions"]] == ["000858.SZ"]
        assert "accounts" not in data

    def test_export_json_is_valid_json(self, backup_service, default_account):
        assert json.loads(backup_service.export_json())["positions"] == []


# =============================================================================
# IMPORT TESTS
# =============================================================================


class TestImport:

    def test_round_trip_restores_positions_and_accounts(
        self, backup_service, position_repo, default_account, second_account, fresh_backup_service
    ):
        """
        GIVEN a full export from one store
        WHEN it is imported into an empty store
        THEN positions and accounts come back intact
        """
        position = sell(buy(make_position(account_id=second_account.account_id), "1700", "100"), "1750", "50")
        position_repo.save_all([position])
        content = backup_service.export_json()

        target, store = fresh_backup_service
        summary = target.import_json(content)

        assert summary.imported_count == 1
        assert summary.error_count == 0
        assert summary.accounts_restored
        restored = CollectionPositionRepository(store).load_all()[0]
        assert restored.position_id == position.position_id
        assert restored.quantity == Decimal("150")
        assert restored.total_sell_amount == Decimal("87500")
        assert restored.account_id == second_account.account_id
        state = CollectionAccountRepository(store).load_state()
        assert {a.name for a in state.accounts} == {default_account.name, second_account.name}

    def test_unknown_account_goes_to_default(self, backup_service, default_account):
        orphan = position_to_dict(make_position(account_id="ghost"))

        summary = backup_service.import_data({"positions": [orphan]})

        assert summary.imported_count == 1
        assert not summary.accounts_restored
        stored = backup_service.export_data()["positions"][0]
        assert stored["account_id"] == default_account.account_id

    def test_invalid_rows_are_skipped(self, backup_service, position_repo, default_account):
        good = position_to_dict(make_position(account_id=default_account.account_id))
        tampered = position_to_dict(make_position(symbol="000858.SZ", account_id=default_account.account_id))
        tampered["quantity"] = "50"
        missing = {"symbol": "601318.SH"}

        summary = backup_service.import_data({"positions": [good, tampered, missing]})

        assert summary.imported_count == 1
        assert summary.skipped_count == 2
        assert summary.error_count == 2
        assert [p.symbol for p in position_repo.load_all()] == ["600519.SH"]

    @pytest.mark.parametrize("field", ["total_buy_amount", "quantity", "cost_price"])
    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_rows_are_skipped(
        self, backup_service, position_repo, default_account, field, value
    ):
        """
        GIVEN a backup row holding a NaN or infinite number
        WHEN the backup is imported
        THEN that row is reported and skipped, and the rest are imported
        """
        good = position_to_dict(make_position(account_id=default_account.account_id))
        bad = position_to_dict(make_position(symbol="000858.SZ", account_id=default_account.account_id))
        bad[field] = value

        summary = backup_service.import_data({"positions": [good, bad]})

        assert summary.imported_count == 1
        assert summary.skipped_count == 1
        assert f"non-finite {field}" in summary.errors[0]
        assert [p.symbol for p in position_repo.load_all()] == ["600519.SH"]

    def test_non_finite_row_without_transactions_is_skipped(self, backup_service, default_account):
        row = position_to_dict(make_position(account_id=default_account.account_id))
        row["transactions"] = []
        row["total_buy_amount"] = "NaN"

        summary = backup_service.import_data({"positions": [row]})

        assert summary.imported_count == 0
        assert summary.error_count == 1

    def test_duplicate_position_ids_skipped(self, backup_service, default_account):
        row = position_to_dict(make_position(account_id=default_account.account_id))

        summary = backup_service.import_data({"positions": [row, dict(row)]})

        assert summary.imported_count == 1
        assert summary.skipped_count == 1

    def test_import_replaces_existing_positions(self, backup_service, position_repo, default_account):
        position_repo.save_all([make_position(account_id=default_account.account_id)])

        backup_service.import_data({"positions": []})

        assert position_repo.load_all() == []

    def test_invalid_json_rejected(self, backup_service):
        with pytest.raises(ValidationError):
            backup_service.import_json("{not json")

    def test_missing_positions_array_rejected(self, backup_service):
        with pytest.raises(ValidationError):
            backup_service.import_data({"version": BACKUP_VERSION})


class TestValidatePosition:

    def test_consistent_position(self):
        assert validate_position(sell(make_position(), "1700", "40")) == []

    def test_nan_transaction_amount(self):
        position = make_position()
        txn = position.transactions[0]
        position.transactions = [replace(txn, amount=Decimal("NaN"))]

        assert validate_position(position) == [f"non-finite transaction {txn.txn_id} amount"]

    def test_quantity_mismatch(self):
        position = make_position()
        position.quantity = Decimal("90")

        assert validate_position(position)
