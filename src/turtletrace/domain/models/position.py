"""Position and transaction domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from turtletrace.domain.models.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """
    A single recorded trade on a position.

    Immutable once created; removed only together with its position.
    ``amount`` is stored redundantly and equals ``price * quantity`` at creation.
    """

    txn_id: str
    txn_type: TransactionType
    price: Decimal
    quantity: Decimal
    amount: Decimal
    timestamp: datetime
    emotion: Optional[str] = None
    reasons: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type))

    @property
    def is_buy(self) -> bool:
        return self.txn_type == TransactionType.BUY


@dataclass
class Position:
    """
    Holding of one symbol within one account.

    Quantity, cost price and the running buy/sell totals are derived from
    ``transactions``. A position whose quantity reaches zero is kept as a
    cleared position for realized-profit reporting.
    """

    position_id: str
    symbol: str
    name: str
    account_id: Optional[str] = None
    cost_price: Decimal = field(default_factory=lambda: Decimal("0"))
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    current_price: Decimal = field(default_factory=lambda: Decimal("0"))
    change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    open_price: Optional[Decimal] = None
    high_price: Optional[Decimal] = None
    low_price: Optional[Decimal] = None
    transactions: list[Transaction] = field(default_factory=list)
    total_buy_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    total_sell_amount: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def is_cleared(self) -> bool:
        """True once sells have brought the quantity to zero or below."""
        return self.quantity <= 0
