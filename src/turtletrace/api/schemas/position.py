"""Pydantic schemas for position endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from turtletrace.domain.models import TransactionType


class TransactionResponse(BaseModel):
    """Response schema for a recorded trade."""

    model_config = {"from_attributes": True}

    txn_id: str
    txn_type: TransactionType
    price: Decimal
    quantity: Decimal
    amount: Decimal
    timestamp: datetime
    emotion: Optional[str] = None
    reasons: list[str] = Field(default_factory=list)


class PositionOpenRequest(BaseModel):
    """Request schema for opening a position with its first buy."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Listing code, e.g. 600519.SH")
    price: Decimal = Field(..., gt=0, description="Buy price")
    quantity: Decimal = Field(..., gt=0, description="Buy quantity")
    account_id: Optional[str] = Field(
        default=None,
        description="Target account; the default account when omitted",
    )
    emotion: Optional[str] = Field(default=None, max_length=50)
    reasons: list[str] = Field(default_factory=list)

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TradeRequest(BaseModel):
    """Request schema for a buy or sell on an existing position."""

    txn_type: TransactionType
    price: Decimal = Field(..., gt=0)
    quantity: Decimal = Field(..., gt=0)
    emotion: Optional[str] = Field(default=None, max_length=50)
    reasons: list[str] = Field(default_factory=list)


class PositionPayload(BaseModel):
    """Full position as supplied in a bulk replace."""

    model_config = {"from_attributes": True}

    position_id: str
    account_id: Optional[str] = None
    symbol: str
    name: str
    cost_price: Decimal
    quantity: Decimal
    current_price: Decimal
    change_percent: Decimal
    open_price: Optional[Decimal] = None
    high_price: Optional[Decimal] = None
    low_price: Optional[Decimal] = None
    transactions: list[TransactionResponse] = Field(default_factory=list)
    total_buy_amount: Decimal
    total_sell_amount: Decimal


class PositionResponse(PositionPayload):
    """Response schema for a single position."""

    is_cleared: bool


class PositionListResponse(BaseModel):
    positions: list[PositionResponse]
    count: int


class PositionReplaceRequest(BaseModel):
    """Complete replacement for the positions visible in an account view."""

    account_id: Optional[str] = Field(
        default=None,
        description="Account view being edited; null for all accounts",
    )
    positions: list[PositionPayload]


class RefreshResponse(BaseModel):
    model_config = {"from_attributes": True}

    updated: int
    skipped: int
    skipped_symbols: list[str]
    refreshed_at: Optional[datetime] = None
