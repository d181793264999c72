"""Conversion between domain models and JSON-ready dictionaries.

Decimals are written as strings and datetimes as ISO-8601 so that a
dump/load cycle reproduces equal domain objects.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from turtletrace.core.timezone import parse_date, parse_datetime_market
from turtletrace.domain.models import (
    Account,
    AccountsState,
    DailyReview,
    Position,
    Tag,
    Transaction,
    WeeklyReview,
)


def _dec(value: Any) -> Decimal:
    return Decimal(str(value))


def _opt_dec(value: Any) -> Optional[Decimal]:
    return None if value is None else Decimal(str(value))


def _opt_str(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    return parse_datetime_market(value) if value else None


# =============================================================================
# POSITIONS
# =============================================================================


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    return {
        "txn_id": txn.txn_id,
        "txn_type": txn.txn_type.value,
        "price": str(txn.price),
        "quantity": str(txn.quantity),
        "amount": str(txn.amount),
        "timestamp": txn.timestamp.isoformat(),
        "emotion": txn.emotion,
        "reasons": list(txn.reasons),
    }


def transaction_from_dict(data: dict[str, Any]) -> Transaction:
    return Transaction(
        txn_id=data["txn_id"],
        txn_type=data["txn_type"],
        price=_dec(data["price"]),
        quantity=_dec(data["quantity"]),
        amount=_dec(data["amount"]),
        timestamp=parse_datetime_market(data["timestamp"]),
        emotion=data.get("emotion"),
        reasons=list(data.get("reasons") or []),
    )


def position_to_dict(position: Position) -> dict[str, Any]:
    return {
        "position_id": position.position_id,
        "account_id": position.account_id,
        "symbol": position.symbol,
        "name": position.name,
        "cost_price": str(position.cost_price),
        "quantity": str(position.quantity),
        "current_price": str(position.current_price),
        "change_percent": str(position.change_percent),
        "open_price": _opt_str(position.open_price),
        "high_price": _opt_str(position.high_price),
        "low_price": _opt_str(position.low_price),
        "transactions": [transaction_to_dict(t) for t in position.transactions],
        "total_buy_amount": str(position.total_buy_amount),
        "total_sell_amount": str(position.total_sell_amount),
    }


def position_from_dict(data: dict[str, Any]) -> Position:
    """
    Build a Position from its stored form.

    Raises:
        KeyError: A required field is missing.
        decimal.InvalidOperation: A numeric field does not parse.
        ValueError: An enum or timestamp field does not parse.
    """
    return Position(
        position_id=data["position_id"],
        account_id=data.get("account_id"),
        symbol=data["symbol"],
        name=data.get("name") or data["symbol"],
        cost_price=_dec(data["cost_price"]),
        quantity=_dec(data["quantity"]),
        current_price=_dec(data.get("current_price", "0")),
        change_percent=_dec(data.get("change_percent", "0")),
        open_price=_opt_dec(data.get("open_price")),
        high_price=_opt_dec(data.get("high_price")),
        low_price=_opt_dec(data.get("low_price")),
        transactions=[transaction_from_dict(t) for t in data.get("transactions", [])],
        total_buy_amount=_dec(data["total_buy_amount"]),
        total_sell_amount=_dec(data["total_sell_amount"]),
    )


# =============================================================================
# ACCOUNTS
# =============================================================================


def account_to_dict(account: Account) -> dict[str, Any]:
    return {
        "account_id": account.account_id,
        "name": account.name,
        "account_type": account.account_type.value,
        "broker": account.broker,
        "description": account.description,
        "color": account.color,
        "is_default": account.is_default,
        "created_at": _dt(account.created_at),
        "updated_at": _dt(account.updated_at),
    }


def account_from_dict(data: dict[str, Any]) -> Account:
    return Account(
        account_id=data["account_id"],
        name=data["name"],
        account_type=data.get("account_type", "broker"),
        broker=data.get("broker"),
        description=data.get("description"),
        color=data.get("color"),
        is_default=bool(data.get("is_default", False)),
        created_at=_parse_dt(data.get("created_at")),
        updated_at=_parse_dt(data.get("updated_at")),
    )


def accounts_state_to_dict(state: AccountsState) -> dict[str, Any]:
    return {
        "accounts": [account_to_dict(a) for a in state.accounts],
        "default_account_id": state.default_account_id,
        "last_active_account_id": state.last_active_account_id,
    }


def accounts_state_from_dict(data: dict[str, Any]) -> AccountsState:
    return AccountsState(
        accounts=[account_from_dict(a) for a in data.get("accounts", [])],
        default_account_id=data.get("default_account_id"),
        last_active_account_id=data.get("last_active_account_id"),
    )


# =============================================================================
# TAGS AND REVIEWS
# =============================================================================


def tag_to_dict(tag: Tag) -> dict[str, Any]:
    return {"tag_id": tag.tag_id, "name": tag.name, "color": tag.color}


def tag_from_dict(data: dict[str, Any]) -> Tag:
    return Tag(tag_id=str(data["tag_id"]), name=data["name"], color=data.get("color", ""))


def daily_review_to_dict(review: DailyReview) -> dict[str, Any]:
    return {
        "review_id": review.review_id,
        "review_date": review.review_date.isoformat(),
        "created_at": _dt(review.created_at),
        "updated_at": _dt(review.updated_at),
        "sections": review.sections,
        "summary": review.summary,
    }


def daily_review_from_dict(data: dict[str, Any]) -> DailyReview:
    review_date: date = parse_date(data["review_date"])
    return DailyReview(
        review_id=data.get("review_id") or review_date.isoformat(),
        review_date=review_date,
        created_at=_parse_dt(data.get("created_at")),
        updated_at=_parse_dt(data.get("updated_at")),
        sections=dict(data.get("sections") or {}),
        summary=data.get("summary", ""),
    )


def weekly_review_to_dict(review: WeeklyReview) -> dict[str, Any]:
    return {
        "review_id": review.review_id,
        "week_label": review.week_label,
        "start_date": review.start_date.isoformat(),
        "end_date": review.end_date.isoformat(),
        "created_at": _dt(review.created_at),
        "updated_at": _dt(review.updated_at),
        "sections": review.sections,
        "key_insight": review.key_insight,
    }


def weekly_review_from_dict(data: dict[str, Any]) -> WeeklyReview:
    return WeeklyReview(
        review_id=data.get("review_id") or data["week_label"],
        week_label=data["week_label"],
        start_date=parse_date(data["start_date"]),
        end_date=parse_date(data["end_date"]),
        created_at=_parse_dt(data.get("created_at")),
        updated_at=_parse_dt(data.get("updated_at")),
        sections=dict(data.get("sections") or {}),
        key_insight=data.get("key_insight", ""),
    )
