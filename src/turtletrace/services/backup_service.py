"""JSON backup export and import of positions and accounts."""

import json
import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from turtletrace.core.exceptions import ValidationError
from turtletrace.core.timezone import now_market
from turtletrace.domain.models import Position
from turtletrace.domain.views import ImportSummary
from turtletrace.repositories.codec import (
    accounts_state_from_dict,
    accounts_state_to_dict,
    position_from_dict,
    position_to_dict,
)
from turtletrace.repositories.protocols import AccountRepository, PositionRepository
from turtletrace.repositories.schema import MigrationStatus, migrate_accounts
from turtletrace.services.account_partition import resolve_view
from turtletrace.services.position_ledger import recompute
from turtletrace.services.profit_engine import calculate_profit_summary

logger = logging.getLogger(__name__)

BACKUP_VERSION = "2.0.0"
AMOUNT_TOLERANCE = Decimal("0.01")


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, Decimals, datetimes and Enums into JSON-ready values."""
    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def _non_finite_fields(position: Position) -> list[str]:
    values = {
        "cost_price": position.cost_price,
        "quantity": position.quantity,
        "current_price": position.current_price,
        "change_percent": position.change_percent,
        "open_price": position.open_price,
        "high_price": position.high_price,
        "low_price": position.low_price,
        "total_buy_amount": position.total_buy_amount,
        "total_sell_amount": position.total_sell_amount,
    }
    for txn in position.transactions:
        values[f"transaction {txn.txn_id} price"] = txn.price
        values[f"transaction {txn.txn_id} quantity"] = txn.quantity
        values[f"transaction {txn.txn_id} amount"] = txn.amount
    return [name for name, value in values.items() if value is not None and not value.is_finite()]


def validate_position(position: Position) -> list[str]:
    """
    Check a position against its own transaction history.

    Returns a list of problems; empty means consistent. Positions without
    transactions (pre-history data) are only checked for sign. NaN and
    infinite values are reported before any arithmetic is attempted.
    """
    non_finite = _non_finite_fields(position)
    if non_finite:
        return [f"non-finite {name}" for name in non_finite]

    problems = []
    for txn in position.transactions:
        if txn.price <= 0 or txn.quantity <= 0:
            problems.append(f"transaction {txn.txn_id} has non-positive price or quantity")
        elif abs(txn.amount - txn.price * txn.quantity) > AMOUNT_TOLERANCE:
            problems.append(
                f"transaction {txn.txn_id} amount {txn.amount} != price x quantity"
            )
    if problems or not position.transactions:
        if position.total_buy_amount < 0 or position.total_sell_amount < 0:
            problems.append("negative buy or sell total")
        return problems

    replayed = recompute(position)
    if replayed.quantity != position.quantity:
        problems.append(
            f"quantity {position.quantity} does not match transactions ({replayed.quantity})"
        )
    if abs(replayed.total_buy_amount - position.total_buy_amount) > AMOUNT_TOLERANCE:
        problems.append("total_buy_amount does not match transactions")
    if abs(replayed.total_sell_amount - position.total_sell_amount) > AMOUNT_TOLERANCE:
        problems.append("total_sell_amount does not match transactions")
    return problems


class BackupService:
    """
    Whole-collection JSON backups.

    Export writes positions (for one account or all), the profit summary
    and, for full backups, the account state. Import replaces the stored
    positions wholesale with every row that passes validation.
    """

    def __init__(
        self,
        position_repo: PositionRepository,
        account_repo: AccountRepository,
    ):
        self._position_repo = position_repo
        self._account_repo = account_repo

    def export_data(self, account_id: Optional[str] = None) -> dict[str, Any]:
        positions = resolve_view(self._position_repo.load_all(), account_id)
        data: dict[str, Any] = {
            "version": BACKUP_VERSION,
            "export_time": now_market().isoformat(),
            "positions": [position_to_dict(p) for p in positions],
            "summary": to_jsonable(calculate_profit_summary(positions)),
        }
        if account_id is None:
            data["accounts"] = accounts_state_to_dict(self._account_repo.load_state())
        return data

    def export_json(self, account_id: Optional[str] = None) -> str:
        return json.dumps(self.export_data(account_id), ensure_ascii=False, indent=2)

    def import_json(self, content: str) -> ImportSummary:
        """
        Restore positions (and accounts, if present) from a backup.

        Raises:
            ValidationError: Not JSON, or no ``positions`` array
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid backup file: {e}") from e
        return self.import_data(data)

    def import_data(self, data: Any) -> ImportSummary:
        if not isinstance(data, dict) or not isinstance(data.get("positions"), list):
            raise ValidationError("Backup must contain a 'positions' array")

        summary = ImportSummary()
        state = self._account_repo.load_state()
        if data.get("accounts") is not None:
            result = migrate_accounts(json.dumps(data["accounts"]))
            if result.status == MigrationStatus.UNREADABLE:
                summary.errors.append(f"Accounts not restored: {result.error}")
            else:
                state = accounts_state_from_dict(result.document)
                summary.accounts_restored = True

        known_ids = {a.account_id for a in state.accounts}
        seen_ids: set[str] = set()
        imported: list[Position] = []
        for index, row in enumerate(data["positions"], start=1):
            try:
                position = position_from_dict(row)
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                summary.errors.append(f"Position {index}: unreadable ({e!r})")
                continue

            problems = validate_position(position)
            if position.position_id in seen_ids:
                problems.append(f"duplicate position id {position.position_id}")
            if problems:
                summary.errors.append(f"Position {index} ({position.symbol}): {'; '.join(problems)}")
                continue

            if position.account_id not in known_ids:
                position.account_id = state.default_account_id
            seen_ids.add(position.position_id)
            imported.append(position)

        summary.error_count = len(summary.errors)
        summary.skipped_count = len(data["positions"]) - len(imported)
        summary.imported_count = len(imported)

        if summary.accounts_restored:
            self._account_repo.save_state(state)
        self._position_repo.save_all(imported)
        logger.info(
            "Imported %d positions (%d skipped, accounts restored: %s)",
            summary.imported_count,
            summary.skipped_count,
            summary.accounts_restored,
        )
        return summary
