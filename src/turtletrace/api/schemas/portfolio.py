"""Pydantic schemas for profit summary endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PositionProfitResponse(BaseModel):
    model_config = {"from_attributes": True}

    position_id: str
    symbol: str
    name: str
    account_id: Optional[str] = None
    quantity: Decimal
    cost_price: Decimal
    current_price: Decimal
    cost: Decimal
    value: Decimal
    profit: Decimal
    profit_percent: Decimal


class ClearedPositionProfitResponse(BaseModel):
    model_config = {"from_attributes": True}

    position_id: str
    symbol: str
    name: str
    account_id: Optional[str] = None
    buy_amount: Decimal
    sell_amount: Decimal
    profit: Decimal
    profit_percent: Decimal


class ClearedProfitResponse(BaseModel):
    """Realized profit over cleared positions."""

    model_config = {"from_attributes": True}

    total_buy_amount: Decimal
    total_sell_amount: Decimal
    total_profit: Decimal
    total_profit_percent: Decimal
    count: int
    positions: list[ClearedPositionProfitResponse]


class ProfitSummaryResponse(BaseModel):
    """Unrealized profit summary; ``cleared_profit`` is null when nothing is cleared."""

    model_config = {"from_attributes": True}

    total_cost: Decimal
    total_value: Decimal
    total_profit: Decimal
    total_profit_percent: Decimal
    positions: list[PositionProfitResponse]
    cleared_profit: Optional[ClearedProfitResponse] = None
