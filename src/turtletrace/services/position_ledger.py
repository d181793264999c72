"""Pure position ledger: open positions and apply trades.

Functions here never mutate their inputs. Each successful operation
returns a new :class:`Position`; each rejected one raises a named
:class:`~turtletrace.core.exceptions.AppError` and leaves the input as-is.

Derived fields follow one set of formulas:

- ``quantity = sum(buy.quantity) - sum(sell.quantity)``
- ``cost_price = (total_buy_amount - total_sell_amount) / quantity`` while
  quantity is positive, otherwise 0
- ``change_percent = (current_price - cost_price) / cost_price * 100`` while
  cost_price is positive, otherwise 0
"""

import uuid
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from turtletrace.core.exceptions import (
    DuplicatePositionError,
    InsufficientSharesError,
    QuoteNotFoundError,
    ValidationError,
)
from turtletrace.core.timezone import now_market
from turtletrace.domain.models import Position, Transaction, TransactionType
from turtletrace.domain.views import Quote

_ZERO = Decimal("0")
_CENT = Decimal("0.01")


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def compute_cost_price(
    total_buy_amount: Decimal,
    total_sell_amount: Decimal,
    quantity: Decimal,
) -> Decimal:
    if quantity <= 0:
        return _ZERO
    return (total_buy_amount - total_sell_amount) / quantity


def compute_change_percent(cost_price: Decimal, current_price: Decimal) -> Decimal:
    if cost_price <= 0:
        return _ZERO
    return ((current_price - cost_price) / cost_price * 100).quantize(_CENT, rounding=ROUND_HALF_UP)


def validate_trade_input(price: Decimal, quantity: Decimal) -> None:
    """Reject missing or non-positive price and quantity."""
    if price is None or price <= 0:
        raise ValidationError("Price must be positive")
    if quantity is None or quantity <= 0:
        raise ValidationError("Quantity must be positive")


def check_duplicate_symbol(positions: Iterable[Position], symbol: str) -> None:
    """
    Reject opening ``symbol`` when any position already tracks it.

    The comparison ignores ``account_id``: a symbol held in one account
    blocks opening it in another.
    """
    symbol = normalize_symbol(symbol)
    if any(p.symbol == symbol for p in positions):
        raise DuplicatePositionError(symbol)


def make_transaction(
    txn_type: TransactionType,
    price: Decimal,
    quantity: Decimal,
    emotion: Optional[str] = None,
    reasons: Optional[list[str]] = None,
    timestamp: Optional[datetime] = None,
) -> Transaction:
    return Transaction(
        txn_id=str(uuid.uuid4()),
        txn_type=txn_type,
        price=price,
        quantity=quantity,
        amount=price * quantity,
        timestamp=timestamp or now_market(),
        emotion=emotion,
        reasons=list(reasons or []),
    )


def open_position(
    symbol: str,
    price: Decimal,
    quantity: Decimal,
    quote: Optional[Quote],
    account_id: Optional[str] = None,
    emotion: Optional[str] = None,
    reasons: Optional[list[str]] = None,
    timestamp: Optional[datetime] = None,
) -> Position:
    """
    Create a position from its first buy.

    Args:
        symbol: Listing code, e.g. ``600519.SH``
        price: Buy price, must be positive
        quantity: Buy quantity, must be positive
        quote: Quote lookup result for ``symbol``; None means unrecognized
        account_id: Account the position is filed under

    Raises:
        ValidationError: Non-positive price or quantity
        QuoteNotFoundError: ``quote`` is None
    """
    validate_trade_input(price, quantity)
    symbol = normalize_symbol(symbol)
    if quote is None:
        raise QuoteNotFoundError(symbol)

    txn = make_transaction(TransactionType.BUY, price, quantity, emotion, reasons, timestamp)
    return Position(
        position_id=str(uuid.uuid4()),
        symbol=symbol,
        name=quote.name or symbol,
        account_id=account_id,
        cost_price=price,
        quantity=quantity,
        current_price=quote.price,
        change_percent=compute_change_percent(price, quote.price),
        open_price=quote.open_price,
        high_price=quote.high_price,
        low_price=quote.low_price,
        transactions=[txn],
        total_buy_amount=txn.amount,
        total_sell_amount=_ZERO,
    )


def apply_trade(
    position: Position,
    txn_type: TransactionType,
    price: Decimal,
    quantity: Decimal,
    emotion: Optional[str] = None,
    reasons: Optional[list[str]] = None,
    timestamp: Optional[datetime] = None,
) -> Position:
    """
    Record a buy or sell against an existing position.

    Selling down to exactly zero is allowed; the position stays in place
    as a cleared position with its full history.

    Raises:
        ValidationError: Non-positive price or quantity
        InsufficientSharesError: Sell quantity exceeds the held quantity
    """
    validate_trade_input(price, quantity)
    txn_type = TransactionType(txn_type)

    if txn_type == TransactionType.SELL and quantity > position.quantity:
        raise InsufficientSharesError(
            position.symbol,
            str(quantity),
            str(max(position.quantity, _ZERO)),
        )

    txn = make_transaction(txn_type, price, quantity, emotion, reasons, timestamp)
    total_buy = position.total_buy_amount
    total_sell = position.total_sell_amount
    if txn_type == TransactionType.BUY:
        total_buy += txn.amount
        new_quantity = position.quantity + quantity
    else:
        total_sell += txn.amount
        new_quantity = position.quantity - quantity

    cost_price = compute_cost_price(total_buy, total_sell, new_quantity)
    return replace(
        position,
        quantity=new_quantity,
        cost_price=cost_price,
        total_buy_amount=total_buy,
        total_sell_amount=total_sell,
        change_percent=compute_change_percent(cost_price, position.current_price),
        transactions=[*position.transactions, txn],
    )


def apply_quote(position: Position, quote: Quote) -> Position:
    """Update market fields from a fresh quote, keeping the cost basis."""
    return replace(
        position,
        current_price=quote.price,
        change_percent=compute_change_percent(position.cost_price, quote.price),
        open_price=quote.open_price,
        high_price=quote.high_price,
        low_price=quote.low_price,
        name=quote.name or position.name,
    )


def recompute(position: Position) -> Position:
    """Rebuild quantity, totals and cost price by replaying the transactions."""
    total_buy = sum((t.amount for t in position.transactions if t.is_buy), _ZERO)
    total_sell = sum((t.amount for t in position.transactions if not t.is_buy), _ZERO)
    quantity = sum(
        (t.quantity if t.is_buy else -t.quantity for t in position.transactions),
        _ZERO,
    )
    cost_price = compute_cost_price(total_buy, total_sell, quantity)
    return replace(
        position,
        quantity=quantity,
        total_buy_amount=total_buy,
        total_sell_amount=total_sell,
        cost_price=cost_price,
        change_percent=compute_change_percent(cost_price, position.current_price),
    )
