"""CollectionStore-backed AccountRepository."""

from turtletrace.domain.models import AccountsState
from turtletrace.repositories.codec import accounts_state_from_dict, accounts_state_to_dict
from turtletrace.repositories.collections.base import JsonCollectionRepository
from turtletrace.repositories.schema import ACCOUNTS_VERSION, dump_document, migrate_accounts

ACCOUNTS_KEY = "accounts"


class CollectionAccountRepository(JsonCollectionRepository):
    """Stores accounts with default/last-active selections as one document."""

    def load_state(self) -> AccountsState:
        return self._load(ACCOUNTS_KEY, migrate_accounts, accounts_state_from_dict)

    def save_state(self, state: AccountsState) -> None:
        self._store.set(
            ACCOUNTS_KEY,
            dump_document(ACCOUNTS_VERSION, **accounts_state_to_dict(state)),
        )
