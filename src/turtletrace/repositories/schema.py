"""Versioned storage schemas and their migrations.

Every collection is stored as a JSON document carrying a ``version``
number. Loading a document runs one migration function per version step
until the current version is reached, and reports what happened as a
:class:`MigrationResult`:

- ``MIGRATED``: the stored document was older (or absent and needed
  seeding) and has been upgraded; callers should write it back.
- ``ALREADY_CURRENT``: the document was usable as-is.
- ``UNREADABLE``: the document could not be parsed or upgraded; callers
  decide how to recover.

Version history:

positions
    1. Bare JSON array of position objects. ``transactions``,
       ``total_buy_amount`` and ``total_sell_amount`` may be missing.
    2. ``{"version": 2, "items": [...]}`` with every field present.
accounts
    1. ``{"accounts": [...], ...}`` possibly with no accounts at all.
    2. Guarantees exactly one default account and a valid
       ``default_account_id``.
tags, daily_reviews, weekly_reviews
    1. ``{"version": 1, "items": [...]}``.
"""

import json
import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Optional

from turtletrace.core.timezone import now_market
from turtletrace.domain.models import ACCOUNT_COLORS, DEFAULT_ACCOUNT_NAME

logger = logging.getLogger(__name__)

POSITIONS_VERSION = 2
ACCOUNTS_VERSION = 2
ITEMS_VERSION = 1

MigrationStep = Callable[[Any], dict[str, Any]]


class MigrationStatus(str, Enum):
    """Outcome of loading a stored collection."""

    MIGRATED = "migrated"
    ALREADY_CURRENT = "already_current"
    UNREADABLE = "unreadable"


@dataclass
class MigrationResult:
    """Tagged result of running a collection through its migrations."""

    status: MigrationStatus
    document: Optional[dict[str, Any]] = None
    from_version: Optional[int] = None
    error: Optional[str] = None

    @property
    def needs_write(self) -> bool:
        return self.status == MigrationStatus.MIGRATED


class _Unreadable(Exception):
    pass


# =============================================================================
# MIGRATION RUNNER
# =============================================================================


def _run(
    raw: Optional[str],
    current_version: int,
    steps: dict[int, MigrationStep],
    detect_version: Callable[[Any], int],
    empty: Callable[[], tuple[int, Any]],
    validate: Callable[[dict[str, Any]], None],
) -> MigrationResult:
    if raw is None:
        version, document = empty()
    else:
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            return MigrationResult(MigrationStatus.UNREADABLE, error=f"invalid JSON: {e}")
        try:
            version = detect_version(document)
        except _Unreadable as e:
            return MigrationResult(MigrationStatus.UNREADABLE, error=str(e))

    if version > current_version:
        return MigrationResult(
            MigrationStatus.UNREADABLE,
            from_version=version,
            error=f"schema version {version} is newer than supported {current_version}",
        )

    start_version = version
    try:
        while version < current_version:
            document = steps[version](document)
            version += 1
        validate(document)
    except (_Unreadable, KeyError, TypeError, ValueError, InvalidOperation) as e:
        return MigrationResult(
            MigrationStatus.UNREADABLE,
            from_version=start_version,
            error=f"cannot migrate from version {start_version}: {e!r}",
        )

    document["version"] = current_version
    if start_version < current_version:
        status = MigrationStatus.MIGRATED
    else:
        status = MigrationStatus.ALREADY_CURRENT
    return MigrationResult(status, document=document, from_version=start_version)


def _version_field(document: Any) -> int:
    if not isinstance(document, dict):
        raise _Unreadable(f"expected an object, got {type(document).__name__}")
    version = document.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool):
        raise _Unreadable(f"invalid version tag: {version!r}")
    return version


def _validate_items(document: dict[str, Any]) -> None:
    if not isinstance(document.get("items"), list):
        raise _Unreadable("'items' must be a list")


# =============================================================================
# POSITIONS
# =============================================================================


def _detect_positions_version(document: Any) -> int:
    if isinstance(document, list):
        return 1
    return _version_field(document)


def _positions_v1_to_v2(document: Any) -> dict[str, Any]:
    if not isinstance(document, list):
        raise _Unreadable("version 1 positions must be a list")
    items = []
    for entry in document:
        item = dict(entry)
        cost_price = Decimal(str(item["cost_price"]))
        quantity = Decimal(str(item["quantity"]))
        item.setdefault("position_id", str(uuid.uuid4()))
        item.setdefault("name", item["symbol"])
        item.setdefault("current_price", str(cost_price))
        item.setdefault("change_percent", "0")
        if not item.get("transactions"):
            item["transactions"] = []
        if item.get("total_buy_amount") is None:
            item["total_buy_amount"] = str(cost_price * quantity)
        if item.get("total_sell_amount") is None:
            item["total_sell_amount"] = "0"
        items.append(item)
    return {"version": 2, "items": items}


def migrate_positions(raw: Optional[str]) -> MigrationResult:
    """Load the positions collection, upgrading it to the current schema."""
    return _run(
        raw,
        current_version=POSITIONS_VERSION,
        steps={1: _positions_v1_to_v2},
        detect_version=_detect_positions_version,
        empty=lambda: (POSITIONS_VERSION, {"version": POSITIONS_VERSION, "items": []}),
        validate=_validate_items,
    )


# =============================================================================
# ACCOUNTS
# =============================================================================


def _default_account_document(account_id: Optional[str] = None) -> dict[str, Any]:
    now = now_market().isoformat()
    return {
        "account_id": account_id or str(uuid.uuid4()),
        "name": DEFAULT_ACCOUNT_NAME,
        "account_type": "broker",
        "broker": None,
        "description": None,
        "color": ACCOUNT_COLORS[0],
        "is_default": True,
        "created_at": now,
        "updated_at": now,
    }


def _accounts_v1_to_v2(document: dict[str, Any]) -> dict[str, Any]:
    accounts = [dict(a) for a in document.get("accounts") or []]
    last_active = document.get("last_active_account_id")

    if not accounts:
        default = _default_account_document(document.get("default_account_id"))
        logger.info("No accounts found, creating default account %s", default["account_id"])
        return {
            "version": 2,
            "accounts": [default],
            "default_account_id": default["account_id"],
            "last_active_account_id": default["account_id"],
        }

    ids = [a["account_id"] for a in accounts]
    default_id = document.get("default_account_id")
    if default_id not in ids:
        flagged = [a["account_id"] for a in accounts if a.get("is_default")]
        default_id = flagged[0] if flagged else ids[0]
    for account in accounts:
        account["is_default"] = account["account_id"] == default_id

    if last_active is not None and last_active not in ids:
        last_active = default_id

    return {
        "version": 2,
        "accounts": accounts,
        "default_account_id": default_id,
        "last_active_account_id": last_active,
    }


def _validate_accounts(document: dict[str, Any]) -> None:
    accounts = document.get("accounts")
    if not isinstance(accounts, list) or not accounts:
        raise _Unreadable("'accounts' must be a non-empty list")
    defaults = [a for a in accounts if a.get("is_default")]
    if len(defaults) != 1 or defaults[0]["account_id"] != document.get("default_account_id"):
        raise _Unreadable("exactly one default account is required")


def migrate_accounts(raw: Optional[str]) -> MigrationResult:
    """
    Load the accounts collection, upgrading it to the current schema.

    An absent collection is treated as version 1 with no accounts, so the
    result is always ``MIGRATED`` with a freshly synthesized default account.
    """
    return _run(
        raw,
        current_version=ACCOUNTS_VERSION,
        steps={1: _accounts_v1_to_v2},
        detect_version=_version_field,
        empty=lambda: (1, {"version": 1, "accounts": []}),
        validate=_validate_accounts,
    )


# =============================================================================
# SIMPLE ITEM COLLECTIONS
# =============================================================================


def migrate_items(raw: Optional[str]) -> MigrationResult:
    """Load a plain ``items`` collection (tags, reviews)."""
    return _run(
        raw,
        current_version=ITEMS_VERSION,
        steps={},
        detect_version=_version_field,
        empty=lambda: (ITEMS_VERSION, {"version": ITEMS_VERSION, "items": []}),
        validate=_validate_items,
    )


def dump_document(version: int, **fields: Any) -> str:
    """Serialize a collection document with its version tag."""
    return json.dumps({"version": version, **fields}, ensure_ascii=False)
