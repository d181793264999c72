"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from turtletrace.domain.models.enums import AccountType

DEFAULT_ACCOUNT_NAME = "我的账户"

ACCOUNT_COLORS = [
    "#3b82f6",
    "#22c55e",
    "#f97316",
    "#a855f7",
    "#ef4444",
    "#06b6d4",
    "#ec4899",
    "#6b7280",
]


@dataclass
class Account:
    """
    Named bucket positions are filed under (a brokerage, a strategy, a family member).

    Exactly one account carries ``is_default``; it receives positions created
    while the "all accounts" view is active.
    """

    account_id: str
    name: str
    account_type: AccountType = AccountType.BROKER
    broker: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.account_type, str):
            self.account_type = AccountType(self.account_type)


@dataclass
class AccountsState:
    """Everything stored under the accounts collection."""

    accounts: list[Account] = field(default_factory=list)
    default_account_id: Optional[str] = None
    last_active_account_id: Optional[str] = None

    def find(self, account_id: str) -> Optional[Account]:
        for account in self.accounts:
            if account.account_id == account_id:
                return account
        return None
