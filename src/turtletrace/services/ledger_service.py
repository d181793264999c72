"""Ledger service: persisted position lifecycle on top of the pure ledger."""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from turtletrace.core.exceptions import NotFoundError
from turtletrace.core.timezone import now_market
from turtletrace.domain.models import Position, TransactionType
from turtletrace.domain.views import RefreshSummary
from turtletrace.repositories.protocols import AccountRepository, PositionRepository
from turtletrace.services import position_ledger
from turtletrace.services.account_partition import (
    merge_positions,
    resolve_target_account,
    resolve_view,
)
from turtletrace.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


@dataclass
class PositionOpen:
    """Input data for opening a position."""

    symbol: str
    price: Decimal
    quantity: Decimal
    account_id: Optional[str] = None
    emotion: Optional[str] = None
    reasons: list[str] = field(default_factory=list)


@dataclass
class TradeCreate:
    """Input data for a trade against an existing position."""

    txn_type: TransactionType
    price: Decimal
    quantity: Decimal
    emotion: Optional[str] = None
    reasons: list[str] = field(default_factory=list)


class LedgerService:
    """
    Service for managing positions and their trade history.

    Every mutation is a read-modify-write of the whole position collection.
    There is no optimistic concurrency check, so two writers working from
    the same snapshot will overwrite each other (last write wins).
    """

    def __init__(
        self,
        position_repo: PositionRepository,
        account_repo: AccountRepository,
        market_data: MarketDataService,
    ):
        self._position_repo = position_repo
        self._account_repo = account_repo
        self._market_data = market_data

    def list_positions(self, account_id: Optional[str] = None) -> list[Position]:
        """Positions visible under ``account_id`` (None means all accounts)."""
        return resolve_view(self._position_repo.load_all(), account_id)

    def get_position(self, position_id: str) -> Position:
        for position in self._position_repo.load_all():
            if position.position_id == position_id:
                return position
        raise NotFoundError("Position", position_id)

    async def open_position(self, data: PositionOpen) -> Position:
        """
        Open a position with its first buy.

        Validation runs before the quote lookup; the quote is required
        and supplies the display name and current price.

        Raises:
            ValidationError: Non-positive price or quantity
            DuplicatePositionError: The symbol is already tracked in any account
            NotFoundError: ``data.account_id`` names no account
            QuoteNotFoundError: The quote source does not recognize the symbol
        """
        position_ledger.validate_trade_input(data.price, data.quantity)
        symbol = position_ledger.normalize_symbol(data.symbol)
        position_ledger.check_duplicate_symbol(self._position_repo.load_all(), symbol)

        state = self._account_repo.load_state()
        if data.account_id is not None and state.find(data.account_id) is None:
            raise NotFoundError("Account", data.account_id)
        account_id = resolve_target_account(data.account_id, state)

        quote = await self._market_data.get_quote(symbol)
        position = position_ledger.open_position(
            symbol=symbol,
            price=data.price,
            quantity=data.quantity,
            quote=quote,
            account_id=account_id,
            emotion=data.emotion,
            reasons=data.reasons,
        )

        # The collection may have changed while awaiting the quote
        positions = self._position_repo.load_all()
        position_ledger.check_duplicate_symbol(positions, symbol)
        self._position_repo.save_all([*positions, position])
        logger.info(
            "Opened position %s: %s x %s @ %s in account %s",
            position.position_id,
            symbol,
            data.quantity,
            data.price,
            account_id,
        )
        return position

    def execute_trade(self, position_id: str, data: TradeCreate) -> Position:
        """
        Record a buy or sell on an existing position.

        Raises:
            NotFoundError: No such position
            ValidationError: Non-positive price or quantity
            InsufficientSharesError: Sell exceeds the held quantity
        """
        positions = self._position_repo.load_all()
        index = self._index_of(positions, position_id)
        updated = position_ledger.apply_trade(
            positions[index],
            data.txn_type,
            data.price,
            data.quantity,
            emotion=data.emotion,
            reasons=data.reasons,
        )
        positions[index] = updated
        self._position_repo.save_all(positions)
        logger.info(
            "Recorded %s of %s %s @ %s (remaining %s)",
            TransactionType(data.txn_type).value,
            data.quantity,
            updated.symbol,
            data.price,
            updated.quantity,
        )
        return updated

    def delete_position(self, position_id: str) -> None:
        """Remove a position and its whole transaction history."""
        positions = self._position_repo.load_all()
        index = self._index_of(positions, position_id)
        removed = positions.pop(index)
        self._position_repo.save_all(positions)
        logger.info("Deleted position %s (%s)", position_id, removed.symbol)

    async def refresh_prices(self, account_id: Optional[str] = None) -> RefreshSummary:
        """
        Refresh current prices for every position in the view.

        Quotes are fetched concurrently. A position whose lookup fails or
        returns nothing keeps its previous price and is counted as skipped.
        """
        visible = await asyncio.to_thread(self.list_positions, account_id)
        symbols = sorted({p.symbol for p in visible})
        quotes = await self._market_data.get_quotes(symbols)

        visible_ids = {p.position_id for p in visible}
        positions = await asyncio.to_thread(self._position_repo.load_all)
        summary = RefreshSummary(refreshed_at=now_market())
        for index, position in enumerate(positions):
            if position.position_id not in visible_ids:
                continue
            quote = quotes.get(position.symbol)
            if quote is None:
                summary.skipped += 1
                summary.skipped_symbols.append(position.symbol)
                continue
            positions[index] = position_ledger.apply_quote(position, quote)
            summary.updated += 1

        if summary.updated:
            await asyncio.to_thread(self._position_repo.save_all, positions)
        if summary.skipped:
            logger.warning("No quote for %s; kept previous prices", ", ".join(summary.skipped_symbols))
        logger.info("Refreshed %d positions, skipped %d", summary.updated, summary.skipped)
        return summary

    def replace_positions(
        self,
        incoming: list[Position],
        current_account_id: Optional[str] = None,
    ) -> list[Position]:
        """
        Replace the positions of ``current_account_id`` wholesale.

        With no current account the edit is filed under the default account;
        other accounts' positions are kept as they are.

        Returns the full merged position list that was stored.
        """
        state = self._account_repo.load_state()
        if current_account_id is not None and state.find(current_account_id) is None:
            raise NotFoundError("Account", current_account_id)
        default_account_id = resolve_target_account(None, state)

        merged = merge_positions(
            self._position_repo.load_all(),
            incoming,
            current_account_id,
            default_account_id,
        )
        self._position_repo.save_all(merged)
        return merged

    @staticmethod
    def _index_of(positions: list[Position], position_id: str) -> int:
        for index, position in enumerate(positions):
            if position.position_id == position_id:
                return index
        raise NotFoundError("Position", position_id)
