"""View models package."""

from turtletrace.domain.views.portfolio import (
    Quote,
    PositionProfit,
    ClearedPositionProfit,
    ClearedProfit,
    ProfitSummary,
    AccountStats,
    RefreshSummary,
    ImportSummary,
)

__all__ = [
    "Quote",
    "PositionProfit",
    "ClearedPositionProfit",
    "ClearedProfit",
    "ProfitSummary",
    "AccountStats",
    "RefreshSummary",
    "ImportSummary",
]
