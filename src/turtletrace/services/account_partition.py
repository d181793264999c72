"""Account partitioning of the single, merged position list."""

from dataclasses import replace
from typing import Optional

from turtletrace.core.exceptions import ValidationError
from turtletrace.domain.models import Position, AccountsState


def resolve_view(positions: list[Position], current_account_id: Optional[str]) -> list[Position]:
    """Positions visible under ``current_account_id`` (None means all accounts)."""
    if current_account_id is None:
        return list(positions)
    return [p for p in positions if p.account_id == current_account_id]


def resolve_target_account(current_account_id: Optional[str], state: AccountsState) -> str:
    """Concrete account that new or edited positions are filed under."""
    if current_account_id is not None:
        return current_account_id
    if state.default_account_id is None:
        raise ValidationError("No default account configured")
    return state.default_account_id


def merge_positions(
    all_positions: list[Position],
    incoming: list[Position],
    current_account_id: Optional[str],
    default_account_id: str,
) -> list[Position]:
    """
    Merge an edited view back into the full position list.

    ``incoming`` is the complete replacement for one concrete account:
    ``current_account_id``, or ``default_account_id`` when editing the
    all-accounts view. Every position tagged with that account is dropped,
    ``incoming`` is appended re-tagged with it, and other accounts'
    positions pass through unchanged. Merging replaces by account rather
    than upserting by id.
    """
    target = current_account_id if current_account_id is not None else default_account_id

    others = [p for p in all_positions if p.account_id != target]
    return others + [_retag(p, target) for p in incoming]


def _retag(position: Position, account_id: str) -> Position:
    if position.account_id == account_id:
        return position
    return replace(position, account_id=account_id)
