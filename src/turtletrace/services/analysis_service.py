"""Analysis service for profit summaries and account statistics."""

from typing import Optional

from turtletrace.core.exceptions import NotFoundError
from turtletrace.domain.models import AccountsState
from turtletrace.domain.views import AccountStats, ClearedProfit, ProfitSummary
from turtletrace.repositories.protocols import AccountRepository, PositionRepository
from turtletrace.services import profit_engine
from turtletrace.services.account_partition import resolve_view


class AnalysisService:
    """
    Service for read-only portfolio analysis.

    Loads the stored positions, applies the account view and hands the
    result to the profit engine. Nothing here writes.
    """

    def __init__(
        self,
        position_repo: PositionRepository,
        account_repo: AccountRepository,
    ):
        self._position_repo = position_repo
        self._account_repo = account_repo

    def summary(
        self,
        account_id: Optional[str] = None,
        include_cleared: bool = False,
    ) -> ProfitSummary:
        """Unrealized profit for the view, plus the realized aggregate."""
        self._check_account(account_id)
        positions = resolve_view(self._position_repo.load_all(), account_id)
        return profit_engine.calculate_profit_summary(positions, include_cleared=include_cleared)

    def cleared_profit(self, account_id: Optional[str] = None) -> Optional[ClearedProfit]:
        self._check_account(account_id)
        positions = resolve_view(self._position_repo.load_all(), account_id)
        return profit_engine.calculate_cleared_profit(positions)

    def account_stats(self, account_id: str) -> AccountStats:
        state = self._account_repo.load_state()
        account = state.find(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        positions = resolve_view(self._position_repo.load_all(), account_id)
        return profit_engine.calculate_account_stats(account_id, account.name, positions)

    def all_account_stats(self) -> list[AccountStats]:
        """Statistics for every account, in account order."""
        state = self._account_repo.load_state()
        return self._stats_for(state)

    def total_stats(self) -> AccountStats:
        """The virtual ``total`` row summing every account."""
        return profit_engine.calculate_total_stats(self.all_account_stats())

    def _stats_for(self, state: AccountsState) -> list[AccountStats]:
        positions = self._position_repo.load_all()
        return [
            profit_engine.calculate_account_stats(
                account.account_id,
                account.name,
                resolve_view(positions, account.account_id),
            )
            for account in state.accounts
        ]

    def _check_account(self, account_id: Optional[str]) -> None:
        if account_id is not None and not self._account_repo.load_state().find(account_id):
            raise NotFoundError("Account", account_id)
