"""The journal controller: owns the in-memory state and its persistence.

State snapshots are immutable; every mutator builds a new JournalState,
stores it on the journal and returns it. Nothing is written until save()
is called.
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from tzjournal.db.migrations import migrate
from tzjournal.db.store import PREFS_KEY, STATE_KEY, DataStore, recovery_key
from tzjournal.models import Account, JournalState, Preferences, Trade, Transfer
from tzjournal.models.state import default_accounts

logger = logging.getLogger(__name__)

COLLECTIONS = {"accounts": Account, "trades": Trade, "transfers": Transfer}


@dataclass(frozen=True)
class AccountView:
    """One account together with the trades and transfers that reference it."""

    account: Account
    trades: list[Trade]
    transfers: list[Transfer]


def _now_ms() -> int:
    return int(time.time() * 1000)


class Journal:
    """Single-user trading journal backed by a DataStore."""

    def __init__(self, store: DataStore):
        """Initialize with built-in defaults; call load() to read stored data.

        Args:
            store: Persistent blob store.
        """
        self._store = store
        self.state = JournalState()
        self.prefs = Preferences()
        self.current_account_id = self.state.accounts[0].id
        # set by load() when stored data had to be repaired
        self.recovery_key: Optional[str] = None

    # ==================== Persistence ====================

    def load(self) -> JournalState:
        """Read, migrate and merge persisted state over the defaults."""
        raw_prefs = self._store.get_blob(PREFS_KEY)
        if raw_prefs:
            try:
                self.prefs = Preferences.model_validate_json(raw_prefs)
            except ValidationError as e:
                logger.warning("Ignoring unreadable preferences: %s", e)

        raw_state = self._store.get_blob(STATE_KEY)
        if raw_state:
            try:
                state, dropped = self._parse_state(raw_state)
            except ValueError as e:
                # covers JSONDecodeError and UnsupportedSchemaError
                logger.warning("Ignoring unreadable journal data: %s", e)
                self._keep_recovery_copy(raw_state)
            else:
                self.state = state
                if dropped:
                    self._keep_recovery_copy(raw_state)

        self._ensure_account()
        wanted = self.prefs.current_account or self.current_account_id
        if self.state.get_account(wanted) is None:
            wanted = self.state.accounts[0].id
        self.current_account_id = wanted
        return self.state

    def _parse_state(self, raw: str) -> tuple[JournalState, int]:
        """Decode a stored blob record by record.

        Returns:
            The state and the number of records that had to be dropped.
        """
        loaded = json.loads(raw)
        if not isinstance(loaded, dict):
            raise ValueError("journal data is not an object")
        loaded = migrate(loaded)

        fields = {}
        dropped = 0
        for key, model in COLLECTIONS.items():
            if key not in loaded:
                continue
            records = loaded[key]
            if not isinstance(records, list):
                logger.warning("Ignoring unreadable %s collection", key)
                dropped += 1
                continue
            kept = []
            for index, record in enumerate(records):
                try:
                    kept.append(model.model_validate(record))
                except ValidationError as e:
                    logger.warning("Dropping unreadable %s entry #%d: %s", key, index, e)
                    dropped += 1
            fields[key] = kept
        return JournalState().model_copy(update=fields), dropped

    def _keep_recovery_copy(self, raw: str) -> None:
        """Store the original text so the next save() cannot destroy it."""
        key = recovery_key(raw)
        if self._store.get_blob(key) is None:
            self._store.put_blob(key, raw)
        self.recovery_key = key
        logger.warning("Original journal data kept under '%s'", key)

    def save(self) -> None:
        """Write the full state and the preferences, one blob each."""
        self._store.put_blob(STATE_KEY, self.state.to_json())
        self.prefs = self.prefs.model_copy(
            update={"current_account": self.current_account_id}
        )
        self._store.put_blob(PREFS_KEY, self.prefs.to_json())

    def _replace(self, **changes) -> JournalState:
        self.state = self.state.model_copy(update=changes)
        return self.state

    def _ensure_account(self) -> None:
        if not self.state.accounts:
            logger.info("No accounts left, restoring the default account")
            self._replace(accounts=default_accounts())

    # ==================== Accounts ====================

    @property
    def current_account(self) -> Account:
        return self.state.get_account(self.current_account_id) or self.state.accounts[0]

    def set_current_account(self, account_id: str) -> Account:
        """Select the account all views are scoped to.

        Raises:
            ValueError: If no account has this id.
        """
        account = self.state.get_account(account_id)
        if account is None:
            raise ValueError(f"Unknown account: {account_id}")
        self.current_account_id = account.id
        return account

    def find_account(self, ref: str) -> Optional[Account]:
        """Look an account up by id, then by exact name."""
        account = self.state.get_account(ref)
        if account is not None:
            return account
        for candidate in self.state.accounts:
            if candidate.name == ref:
                return candidate
        return None

    def add_account(
        self, name: str, type: str = "Real", initial: float = 0.0
    ) -> Account:
        """Create an account and return it."""
        account = Account(
            id=f"acc_{uuid.uuid4().hex[:8]}",
            name=name,
            type=type,
            initial=initial,
            balance=initial,
        )
        self._replace(accounts=[*self.state.accounts, account])
        return account

    def remove_account(self, account_id: str) -> JournalState:
        """Delete an account. Its trades and transfers are left in place."""
        remaining = [a for a in self.state.accounts if a.id != account_id]
        self._replace(accounts=remaining)
        self._ensure_account()
        if self.state.get_account(self.current_account_id) is None:
            self.current_account_id = self.state.accounts[0].id
        return self.state

    def account_view(self, account_id: Optional[str] = None) -> AccountView:
        """Trades and transfers of an account (the selected one by default)."""
        account_id = account_id or self.current_account_id
        account = self.state.get_account(account_id) or self.state.accounts[0]
        return AccountView(
            account=account,
            trades=[t for t in self.state.trades if t.account == account_id],
            transfers=[t for t in self.state.transfers if t.account_id == account_id],
        )

    # ==================== Trades ====================

    def next_id(self) -> int:
        """A millisecond-timestamp id not used by any trade or transfer."""
        used = [t.id for t in self.state.trades if isinstance(t.id, int)]
        used.extend(t.id for t in self.state.transfers)
        return max([_now_ms(), *(i + 1 for i in used)])

    def get_trade(self, trade_id: Union[int, str]) -> Optional[Trade]:
        for trade in self.state.trades:
            if str(trade.id) == str(trade_id):
                return trade
        return None

    def add_trade(self, trade: Trade) -> JournalState:
        return self._replace(trades=[*self.state.trades, trade])

    def import_trades(self, trades: Iterable[Trade]) -> int:
        """Append imported trades, skipping ids the journal already holds.

        Returns:
            Number of trades added.
        """
        known = {str(t.id) for t in self.state.trades}
        added = []
        for trade in trades:
            if str(trade.id) in known:
                logger.debug("Skipping already imported trade %s", trade.id)
                continue
            known.add(str(trade.id))
            added.append(trade)
        if added:
            self._replace(trades=[*self.state.trades, *added])
        return len(added)

    def remove_trade(self, trade_id: Union[int, str]) -> JournalState:
        """Delete a trade; ids are compared as text."""
        return self._replace(
            trades=[t for t in self.state.trades if str(t.id) != str(trade_id)]
        )

    # ==================== Transfers ====================

    def add_transfer(self, transfer: Transfer) -> JournalState:
        return self._replace(transfers=[*self.state.transfers, transfer])

    def remove_transfer(self, transfer_id: Union[int, str]) -> JournalState:
        return self._replace(
            transfers=[t for t in self.state.transfers if str(t.id) != str(transfer_id)]
        )

    # ==================== State & preferences ====================

    def replace_state(self, state: JournalState) -> JournalState:
        """Swap in a whole new dataset (restore from backup)."""
        self.state = state
        self._ensure_account()
        if self.state.get_account(self.current_account_id) is None:
            self.current_account_id = self.state.accounts[0].id
        return self.state

    def set_dark_mode(self, enabled: bool) -> Preferences:
        self.prefs = self.prefs.model_copy(update={"dark_mode": enabled})
        return self.prefs
