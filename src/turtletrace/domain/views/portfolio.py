"""View models for quotes, profit summaries and bulk operations."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Quote:
    """Market quote data for a symbol."""

    symbol: str
    name: str
    price: Decimal
    change: Decimal = field(default_factory=lambda: Decimal("0"))
    change_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    open_price: Optional[Decimal] = None
    high_price: Optional[Decimal] = None
    low_price: Optional[Decimal] = None
    prev_close: Optional[Decimal] = None
    volume: Optional[Decimal] = None
    timestamp: Optional[datetime] = None


@dataclass
class PositionProfit:
    """Unrealized profit for one open position."""

    position_id: str
    symbol: str
    name: str
    account_id: Optional[str]
    quantity: Decimal
    cost_price: Decimal
    current_price: Decimal
    cost: Decimal
    value: Decimal
    profit: Decimal
    profit_percent: Decimal


@dataclass
class ClearedPositionProfit:
    """Realized profit for one cleared position."""

    position_id: str
    symbol: str
    name: str
    account_id: Optional[str]
    buy_amount: Decimal
    sell_amount: Decimal
    profit: Decimal
    profit_percent: Decimal


@dataclass
class ClearedProfit:
    """Realized profit aggregated over every cleared position."""

    total_buy_amount: Decimal
    total_sell_amount: Decimal
    total_profit: Decimal
    total_profit_percent: Decimal
    count: int
    positions: list[ClearedPositionProfit] = field(default_factory=list)


@dataclass
class ProfitSummary:
    """Portfolio-level unrealized profit plus the separate realized aggregate."""

    total_cost: Decimal
    total_value: Decimal
    total_profit: Decimal
    total_profit_percent: Decimal
    positions: list[PositionProfit] = field(default_factory=list)
    cleared_profit: Optional[ClearedProfit] = None


@dataclass
class AccountStats:
    """Open-position figures for one account (or ``"total"`` across all)."""

    account_id: str
    account_name: str
    total_cost: Decimal
    total_value: Decimal
    total_profit: Decimal
    profit_rate: Decimal
    position_count: int


@dataclass
class RefreshSummary:
    """Outcome of a batch price refresh."""

    updated: int = 0
    skipped: int = 0
    skipped_symbols: list[str] = field(default_factory=list)
    refreshed_at: Optional[datetime] = None


@dataclass
class ImportSummary:
    """Summary of a JSON backup import."""

    imported_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)
    accounts_restored: bool = False
