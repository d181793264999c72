"""Profit attribution: pure derivations from a list of positions.

Nothing here mutates its input or raises; positions are assumed to have
been validated by the ledger. Money values are rounded to cents and
percentages to two decimals only at the output boundary.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from turtletrace.domain.models import Position
from turtletrace.domain.views import (
    AccountStats,
    ClearedPositionProfit,
    ClearedProfit,
    PositionProfit,
    ProfitSummary,
)

_ZERO = Decimal("0")
_CENT = Decimal("0.01")

TOTAL_ACCOUNT_ID = "total"
TOTAL_ACCOUNT_NAME = "全部账户"


def _round(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def _percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator <= 0:
        return _ZERO.quantize(_CENT)
    return _round(numerator / denominator * 100)


def calculate_return_rate(cost_price: Decimal, current_price: Decimal) -> Decimal:
    """Percentage gain of ``current_price`` over ``cost_price`` (0 when cost is not positive)."""
    return _percent(current_price - cost_price, cost_price)


def calculate_position_profit(position: Position) -> PositionProfit:
    cost = position.cost_price * position.quantity
    value = position.current_price * position.quantity
    profit = value - cost
    return PositionProfit(
        position_id=position.position_id,
        symbol=position.symbol,
        name=position.name,
        account_id=position.account_id,
        quantity=position.quantity,
        cost_price=position.cost_price,
        current_price=position.current_price,
        cost=_round(cost),
        value=_round(value),
        profit=_round(profit),
        profit_percent=_percent(profit, cost),
    )


def calculate_cleared_profit(positions: Iterable[Position]) -> Optional[ClearedProfit]:
    """
    Realized profit over positions whose quantity is zero or below.

    Returns None when there is no cleared position at all, which callers
    must not confuse with a zero result.
    """
    items = []
    total_buy = _ZERO
    total_sell = _ZERO
    for position in positions:
        if position.quantity > 0:
            continue
        buy = position.total_buy_amount
        sell = position.total_sell_amount
        total_buy += buy
        total_sell += sell
        items.append(
            ClearedPositionProfit(
                position_id=position.position_id,
                symbol=position.symbol,
                name=position.name,
                account_id=position.account_id,
                buy_amount=_round(buy),
                sell_amount=_round(sell),
                profit=_round(sell - buy),
                profit_percent=_percent(sell - buy, buy),
            )
        )

    if not items:
        return None

    return ClearedProfit(
        total_buy_amount=_round(total_buy),
        total_sell_amount=_round(total_sell),
        total_profit=_round(total_sell - total_buy),
        total_profit_percent=_percent(total_sell - total_buy, total_buy),
        count=len(items),
        positions=items,
    )


def calculate_profit_summary(
    positions: Iterable[Position],
    include_cleared: bool = False,
) -> ProfitSummary:
    """
    Aggregate unrealized profit.

    Args:
        positions: Positions in the current view
        include_cleared: Also list positions with quantity <= 0 in the
            open-position totals. The separate ``cleared_profit`` aggregate
            is computed from every input position either way.
    """
    positions = list(positions)
    shown = positions if include_cleared else [p for p in positions if p.quantity > 0]

    total_cost = _ZERO
    total_value = _ZERO
    items = []
    for position in shown:
        total_cost += position.cost_price * position.quantity
        total_value += position.current_price * position.quantity
        items.append(calculate_position_profit(position))

    total_profit = total_value - total_cost
    return ProfitSummary(
        total_cost=_round(total_cost),
        total_value=_round(total_value),
        total_profit=_round(total_profit),
        total_profit_percent=_percent(total_profit, total_cost),
        positions=items,
        cleared_profit=calculate_cleared_profit(positions),
    )


def calculate_account_stats(
    account_id: str,
    account_name: str,
    positions: Iterable[Position],
) -> AccountStats:
    """Open-position statistics for one account's positions."""
    summary = calculate_profit_summary(positions)
    return AccountStats(
        account_id=account_id,
        account_name=account_name,
        total_cost=summary.total_cost,
        total_value=summary.total_value,
        total_profit=summary.total_profit,
        profit_rate=summary.total_profit_percent,
        position_count=len(summary.positions),
    )


def calculate_total_stats(per_account: Iterable[AccountStats]) -> AccountStats:
    """Sum per-account statistics into the virtual ``total`` row."""
    total_cost = _ZERO
    total_value = _ZERO
    total_profit = _ZERO
    count = 0
    for stats in per_account:
        total_cost += stats.total_cost
        total_value += stats.total_value
        total_profit += stats.total_profit
        count += stats.position_count
    return AccountStats(
        account_id=TOTAL_ACCOUNT_ID,
        account_name=TOTAL_ACCOUNT_NAME,
        total_cost=total_cost,
        total_value=total_value,
        total_profit=total_profit,
        profit_rate=_percent(total_profit, total_cost),
        position_count=count,
    )
