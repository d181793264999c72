"""
Unit tests for the pure position ledger.

Tests cover:
- Opening a position from its first buy
- Adding to and reducing positions (cost price formula)
- Clearing a position
- Rejected trades leave the position untouched
- Duplicate-symbol check across accounts
"""

from decimal import Decimal

import pytest

from turtletrace.core.exceptions import (
    DuplicatePositionError,
    InsufficientSharesError,
    QuoteNotFoundError,
    ValidationError,
)
from turtletrace.domain.models import TransactionType
from turtletrace.domain.views import Quote
from turtletrace.services import position_ledger

from tests.conftest import make_position, buy, sell, assert_decimal_equal


MAOTAI_QUOTE = Quote(
    symbol="600519.SH",
    name="贵州茅台",
    price=Decimal("1700.00"),
    open_price=Decimal("1690.00"),
    high_price=Decimal("1705.00"),
    low_price=Decimal("1688.00"),
)


# =============================================================================
# OPEN POSITION TESTS
# =============================================================================


class TestOpenPosition:
    """Tests for open_position."""

    def test_open_position_records_first_buy(self):
        """
        GIVEN a recognized symbol
        WHEN I buy 100 shares of 600519.SH at 1680.50
        THEN quantity=100, cost_price=1680.50, total_buy_amount=168050
        """
        position = position_ledger.open_position(
            "600519.SH", Decimal("1680.50"), Decimal("100"), MAOTAI_QUOTE, account_id="A"
        )

        assert position.quantity == Decimal("100")
        assert position.cost_price == Decimal("1680.50")
        assert position.total_buy_amount == Decimal("168050")
        assert position.total_sell_amount == Decimal("0")
        assert len(position.transactions) == 1
        assert position.transactions[0].txn_type == TransactionType.BUY
        assert position.transactions[0].amount == Decimal("168050")

    def test_open_position_takes_name_and_market_fields_from_quote(self):
        """
        GIVEN a quote with name and daily range
        WHEN a position is opened
        THEN name, current price and open/high/low come from the quote
        """
        position = position_ledger.open_position(
            "600519.SH", Decimal("1680.50"), Decimal("100"), MAOTAI_QUOTE
        )

        assert position.name == "贵州茅台"
        assert position.current_price == Decimal("1700.00")
        assert position.high_price == Decimal("1705.00")
        assert position.low_price == Decimal("1688.00")
        # (1700 - 1680.50) / 1680.50 * 100
        assert position.change_percent == Decimal("1.16")

    def test_open_position_normalizes_symbol(self):
        position = position_ledger.open_position(
            " 600519.sh ", Decimal("10"), Decimal("1"), MAOTAI_QUOTE
        )

        assert position.symbol == "600519.SH"

    def test_open_position_without_quote_raises(self):
        """
        GIVEN the quote source does not recognize the symbol
        WHEN I open a position
        THEN QuoteNotFoundError is raised
        """
        with pytest.raises(QuoteNotFoundError) as exc_info:
            position_ledger.open_position("999999.SH", Decimal("10"), Decimal("100"), None)

        assert exc_info.value.code == "QUOTE_NOT_FOUND"

    @pytest.mark.parametrize("price,quantity", [
        (Decimal("0"), Decimal("100")),
        (Decimal("-1"), Decimal("100")),
        (Decimal("10"), Decimal("0")),
        (Decimal("10"), Decimal("-5")),
    ])
    def test_open_position_rejects_non_positive_input(self, price, quantity):
        with pytest.raises(ValidationError):
            position_ledger.open_position("600519.SH", price, quantity, MAOTAI_QUOTE)


# =============================================================================
# TRADE TESTS
# =============================================================================


class TestApplyTrade:
    """Tests for apply_trade, following one position through its life."""

    def test_add_to_position_recomputes_cost(self):
        """
        GIVEN 100 shares bought at 1680.50
        WHEN I buy another 100 at 1700.00
        THEN quantity=200, total_buy_amount=338050, cost_price=1690.25
        """
        position = make_position()

        position = buy(position, "1700.00", "100")

        assert position.quantity == Decimal("200")
        assert position.total_buy_amount == Decimal("338050")
        assert position.cost_price == Decimal("1690.25")

    def test_partial_sell_recomputes_cost_from_totals(self):
        """
        GIVEN 200 shares with total_buy_amount=338050
        WHEN I sell 50 at 1750.00
        THEN quantity=150, total_sell_amount=87500,
             cost_price=(338050-87500)/150
        """
        position = buy(make_position(), "1700.00", "100")

        position = sell(position, "1750.00", "50")

        assert position.quantity == Decimal("150")
        assert position.total_sell_amount == Decimal("87500")
        assert position.cost_price == Decimal("250550") / Decimal("150")
        assert_decimal_equal(position.cost_price, Decimal("1670.33"))

    def test_full_exit_clears_position(self):
        """
        GIVEN 150 remaining shares
        WHEN I sell all 150 at 1600.00
        THEN quantity=0, total_sell_amount=327500, cost_price=0
        AND the position is kept as cleared with its full history
        """
        position = sell(buy(make_position(), "1700.00", "100"), "1750.00", "50")

        position = sell(position, "1600.00", "150")

        assert position.quantity == Decimal("0")
        assert position.total_sell_amount == Decimal("327500")
        assert position.cost_price == Decimal("0")
        assert position.is_cleared
        assert len(position.transactions) == 4

    def test_sell_more_than_held_is_rejected(self):
        """
        GIVEN a cleared position (quantity=0)
        WHEN I try to sell 10 shares
        THEN InsufficientSharesError is raised and the position is unchanged
        """
        position = sell(make_position(), "1700.00", "100")
        snapshot = (position.quantity, position.total_sell_amount, len(position.transactions))

        with pytest.raises(InsufficientSharesError) as exc_info:
            sell(position, "1700.00", "10")

        assert exc_info.value.code == "INSUFFICIENT_SHARES"
        assert (position.quantity, position.total_sell_amount, len(position.transactions)) == snapshot

    def test_apply_trade_does_not_mutate_input(self):
        original = make_position()

        updated = buy(original, "1700.00", "100")

        assert original.quantity == Decimal("100")
        assert len(original.transactions) == 1
        assert updated is not original

    def test_trade_records_emotion_and_reasons(self):
        position = position_ledger.apply_trade(
            make_position(),
            TransactionType.BUY,
            Decimal("1690"),
            Decimal("10"),
            emotion="冷静",
            reasons=["技术突破"],
        )

        txn = position.transactions[-1]
        assert txn.emotion == "冷静"
        assert txn.reasons == ["技术突破"]

    def test_quantity_equals_buys_minus_sells(self):
        """
        GIVEN any sequence of accepted trades
        THEN quantity equals sum of buy quantities minus sum of sell quantities
        AND total amounts equal the sums of the transaction amounts
        """
        position = make_position(quantity=Decimal("300"))
        for kind, price, qty in [
            ("buy", "1650", "200"),
            ("sell", "1720", "150"),
            ("buy", "1600", "50"),
            ("sell", "1800", "400"),
        ]:
            position = buy(position, price, qty) if kind == "buy" else sell(position, price, qty)

        buys = sum(t.quantity for t in position.transactions if t.is_buy)
        sells = sum(t.quantity for t in position.transactions if not t.is_buy)
        assert position.quantity == buys - sells == Decimal("0")
        assert position.total_buy_amount == sum(t.amount for t in position.transactions if t.is_buy)
        assert position.total_sell_amount == sum(
            t.amount for t in position.transactions if not t.is_buy
        )


# =============================================================================
# RECOMPUTE / QUOTE TESTS
# =============================================================================


class TestRecomputeAndQuote:

    def test_recompute_matches_incremental_updates(self):
        position = sell(buy(make_position(), "1700.00", "100"), "1750.00", "50")

        replayed = position_ledger.recompute(position)

        assert replayed.quantity == position.quantity
        assert replayed.total_buy_amount == position.total_buy_amount
        assert replayed.total_sell_amount == position.total_sell_amount
        assert replayed.cost_price == position.cost_price

    def test_apply_quote_keeps_cost_basis(self):
        position = make_position()
        quote = Quote(symbol="600519.SH", name="贵州茅台", price=Decimal("1848.55"))

        updated = position_ledger.apply_quote(position, quote)

        assert updated.current_price == Decimal("1848.55")
        assert updated.cost_price == position.cost_price
        assert updated.change_percent == Decimal("10.00")


# =============================================================================
# DUPLICATE SYMBOL TESTS
# =============================================================================


class TestDuplicateSymbol:

    def test_duplicate_symbol_in_same_account_is_rejected(self):
        existing = [make_position(account_id="A")]

        with pytest.raises(DuplicatePositionError) as exc_info:
            position_ledger.check_duplicate_symbol(existing, "600519.SH")

        assert exc_info.value.code == "DUPLICATE_POSITION"

    @pytest.mark.product_question
    def test_duplicate_symbol_check_ignores_account(self):
        """
        GIVEN 600519.SH is held in account A
        WHEN I open 600519.SH in account B
        THEN it is rejected, because the check does not consider the account.

        Kept as observed behavior; whether one symbol may be held in two
        accounts is still to be confirmed with the product owner.
        """
        existing = [make_position(account_id="A")]

        with pytest.raises(DuplicatePositionError):
            position_ledger.check_duplicate_symbol(existing, "600519.SH")

    @pytest.mark.product_question
    def test_cleared_position_still_blocks_reopening(self):
        """
        GIVEN a cleared 600519.SH position
        WHEN the symbol is opened again
        THEN it is rejected; trades must go through the existing position.
        """
        cleared = sell(make_position(), "1700.00", "100")

        with pytest.raises(DuplicatePositionError):
            position_ledger.check_duplicate_symbol([cleared], "600519.sh")
