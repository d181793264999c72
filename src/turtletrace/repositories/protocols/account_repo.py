"""Account repository protocol."""

from typing import Protocol

from turtletrace.domain.models import AccountsState


class AccountRepository(Protocol):
    """Interface for account data access."""

    def load_state(self) -> AccountsState:
        """Load accounts plus default and last-active selections."""
        ...

    def save_state(self, state: AccountsState) -> None:
        """Replace the stored account state."""
        ...
