"""Schema migrations for the persisted journal blob.

Version history:

    0  accounts stored as a list of plain names, trades point at names
    1  accounts stored as records, trades point at account ids (untagged)
    2  same layout as 1, tagged with an explicit ``version`` key

Untagged payloads are classified by shape once; from version 2 onwards the
``version`` key drives the dispatch.
"""

import copy
import logging
from typing import Any, Callable

from tzjournal.models.state import SCHEMA_VERSION

logger = logging.getLogger(__name__)


class UnsupportedSchemaError(ValueError):
    """Raised for payloads written by a newer schema than this build knows."""


def detect_version(payload: dict) -> int:
    """Return the schema version of a raw persisted payload."""
    version = payload.get("version")
    if isinstance(version, int):
        return version

    accounts = payload.get("accounts")
    if isinstance(accounts, list) and accounts and isinstance(accounts[0], str):
        return 0
    return 1


def _from_legacy_names(payload: dict) -> dict:
    """Turn legacy account names into account records and re-link trades."""
    names = payload.get("accounts") or []
    accounts = [
        {"id": f"acc_{i}", "name": name, "type": "Real", "initial": 0, "balance": 0}
        for i, name in enumerate(names)
    ]
    ids_by_name: dict[str, str] = {}
    for account in accounts:
        # first occurrence wins on duplicate names
        ids_by_name.setdefault(account["name"], account["id"])

    unresolved = 0
    for trade in payload.get("trades") or []:
        if not isinstance(trade, dict):
            continue
        account_id = ids_by_name.get(trade.get("account"))
        if account_id is None:
            unresolved += 1
            continue
        trade["account"] = account_id

    if unresolved:
        logger.debug("%d legacy trade(s) reference an unknown account name", unresolved)

    payload["accounts"] = accounts
    payload["version"] = 1
    return payload


def _tag_version(payload: dict) -> dict:
    payload["version"] = 2
    return payload


MIGRATIONS: dict[int, Callable[[dict], dict]] = {
    0: _from_legacy_names,
    1: _tag_version,
}


def migrate(payload: dict[str, Any]) -> dict[str, Any]:
    """Bring a raw persisted payload up to the current schema version.

    The input is never modified; a migrated copy is returned. A payload that
    is already current is returned as an equal copy.

    Args:
        payload: Decoded JSON state blob.

    Returns:
        The payload in the current layout.

    Raises:
        UnsupportedSchemaError: If the payload is newer than SCHEMA_VERSION.
    """
    version = detect_version(payload)
    if not 0 <= version <= SCHEMA_VERSION:
        raise UnsupportedSchemaError(
            f"Journal data uses schema version {version}, "
            f"this build supports up to {SCHEMA_VERSION}"
        )

    migrated = copy.deepcopy(payload)
    while version < SCHEMA_VERSION:
        logger.info("Migrating journal data from schema version %d", version)
        migrated = MIGRATIONS[version](migrated)
        version = detect_version(migrated)
    return migrated
