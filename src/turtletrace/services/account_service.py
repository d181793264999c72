"""Account service for account lifecycle and selection state."""

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Optional

from turtletrace.core.exceptions import (
    DefaultAccountDeletionError,
    NotFoundError,
    ValidationError,
)
from turtletrace.core.timezone import now_market
from turtletrace.domain.models import ACCOUNT_COLORS, Account, AccountsState, AccountType
from turtletrace.repositories.protocols import AccountRepository, PositionRepository

logger = logging.getLogger(__name__)


@dataclass
class AccountCreate:
    """Input data for creating an account."""

    name: str
    account_type: AccountType = AccountType.BROKER
    broker: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False


@dataclass
class AccountUpdate:
    """Partial update data for editing an account."""

    name: Optional[str] = None
    account_type: Optional[AccountType] = None
    broker: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    is_default: Optional[bool] = None


class AccountService:
    """
    Service for managing accounts.

    Keeps exactly one default account at all times and tracks which account
    view was last active (None meaning "all accounts").
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        position_repo: PositionRepository,
    ):
        self._account_repo = account_repo
        self._position_repo = position_repo

    def initialize(self) -> AccountsState:
        """
        Prepare account storage for use.

        Loading runs the schema migrations (which create the default account
        on first run). Positions saved before accounts existed are then
        filed under the default account.
        """
        state = self._account_repo.load_state()
        positions = self._position_repo.load_all()
        untagged = [p for p in positions if not p.account_id]
        if untagged:
            self._position_repo.save_all([
                p if p.account_id else replace(p, account_id=state.default_account_id)
                for p in positions
            ])
            logger.info(
                "Assigned %d legacy positions to default account %s",
                len(untagged),
                state.default_account_id,
            )
        return state

    def list_accounts(self) -> list[Account]:
        return self._account_repo.load_state().accounts

    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        account = self._account_repo.load_state().find(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def get_default_account(self) -> Account:
        state = self._account_repo.load_state()
        return state.find(state.default_account_id) or state.accounts[0]

    def create_account(self, data: AccountCreate) -> Account:
        """
        Create a new account.

        Raises:
            ValidationError: Blank name or a name already in use
        """
        state = self._account_repo.load_state()
        name = self._validate_name(state, data.name)

        now = now_market()
        account = Account(
            account_id=str(uuid.uuid4()),
            name=name,
            account_type=data.account_type,
            broker=data.broker,
            description=data.description,
            color=data.color or ACCOUNT_COLORS[len(state.accounts) % len(ACCOUNT_COLORS)],
            is_default=False,
            created_at=now,
            updated_at=now,
        )
        state.accounts.append(account)
        if data.is_default:
            self._make_default(state, account.account_id)

        self._account_repo.save_state(state)
        logger.info("Created account %s (%s)", account.account_id, name)
        return account

    def update_account(self, account_id: str, patch: AccountUpdate) -> Account:
        """
        Apply a partial update to an account.

        Raises:
            NotFoundError: No such account
            ValidationError: Duplicate name, or an attempt to unset the
                default flag instead of promoting another account
        """
        state = self._account_repo.load_state()
        account = state.find(account_id)
        if not account:
            raise NotFoundError("Account", account_id)

        if patch.name is not None:
            account.name = self._validate_name(state, patch.name, exclude_id=account_id)
        if patch.account_type is not None:
            account.account_type = AccountType(patch.account_type)
        if patch.broker is not None:
            account.broker = patch.broker
        if patch.description is not None:
            account.description = patch.description
        if patch.color is not None:
            account.color = patch.color
        if patch.is_default is True:
            self._make_default(state, account_id)
        elif patch.is_default is False and account.is_default:
            raise ValidationError("Set another account as default instead of clearing the flag")

        account.updated_at = now_market()
        self._account_repo.save_state(state)
        return account

    def delete_account(self, account_id: str) -> None:
        """
        Delete a non-default account without open positions.

        The account's remaining cleared positions are deleted with it.
        If it was the last active account, the default account takes over.

        Raises:
            NotFoundError: No such account
            DefaultAccountDeletionError: The account is the default account
            ValidationError: The account still holds open positions
        """
        state = self._account_repo.load_state()
        account = state.find(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        if account.is_default or state.default_account_id == account_id:
            raise DefaultAccountDeletionError(account_id)

        positions = self._position_repo.load_all()
        owned = [p for p in positions if p.account_id == account_id]
        open_symbols = [p.symbol for p in owned if p.quantity > 0]
        if open_symbols:
            raise ValidationError(
                f"Account still holds open positions ({', '.join(open_symbols)}); clear them first"
            )

        if owned:
            self._position_repo.save_all([p for p in positions if p.account_id != account_id])

        state.accounts = [a for a in state.accounts if a.account_id != account_id]
        if state.last_active_account_id == account_id:
            state.last_active_account_id = state.default_account_id
        self._account_repo.save_state(state)
        logger.info(
            "Deleted account %s with %d cleared positions",
            account_id,
            len(owned),
        )

    def set_default_account(self, account_id: str) -> Account:
        state = self._account_repo.load_state()
        if not state.find(account_id):
            raise NotFoundError("Account", account_id)
        self._make_default(state, account_id)
        self._account_repo.save_state(state)
        return state.find(account_id)

    def get_last_active_account_id(self) -> Optional[str]:
        """Account view last selected; None means "all accounts"."""
        state = self._account_repo.load_state()
        if state.last_active_account_id and not state.find(state.last_active_account_id):
            return state.default_account_id
        return state.last_active_account_id

    def set_last_active_account(self, account_id: Optional[str]) -> None:
        state = self._account_repo.load_state()
        if account_id is not None and not state.find(account_id):
            raise NotFoundError("Account", account_id)
        state.last_active_account_id = account_id
        self._account_repo.save_state(state)

    @staticmethod
    def _make_default(state: AccountsState, account_id: str) -> None:
        for account in state.accounts:
            account.is_default = account.account_id == account_id
        state.default_account_id = account_id

    @staticmethod
    def _validate_name(
        state: AccountsState,
        name: str,
        exclude_id: Optional[str] = None,
    ) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        if any(a.name == name and a.account_id != exclude_id for a in state.accounts):
            raise ValidationError(f"Account with name '{name}' already exists")
        return name
