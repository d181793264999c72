"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from turtletrace.domain.models import AccountType


class AccountCreateRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=100, description="Unique account name")
    account_type: AccountType = Field(default=AccountType.BROKER, description="Account kind")
    broker: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=20)
    is_default: bool = False


class AccountUpdateRequest(BaseModel):
    """Request schema for updating an account (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    account_type: Optional[AccountType] = None
    broker: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=20)
    is_default: Optional[bool] = None


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    account_type: AccountType
    broker: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
    default_account_id: Optional[str] = None


class ActiveAccountRequest(BaseModel):
    """Select the active account view (null = all accounts)."""

    account_id: Optional[str] = None


class ActiveAccountResponse(BaseModel):
    account_id: Optional[str] = None


class AccountStatsResponse(BaseModel):
    """Open-position statistics for one account or the total row."""

    model_config = {"from_attributes": True}

    account_id: str
    account_name: str
    total_cost: Decimal
    total_value: Decimal
    total_profit: Decimal
    profit_rate: Decimal
    position_count: int


class AccountStatsListResponse(BaseModel):
    accounts: list[AccountStatsResponse]
    total: AccountStatsResponse
