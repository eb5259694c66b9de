"""Persisted journal state and preferences."""

from typing import Optional
from pydantic import BaseModel, Field

from tzjournal.models.account import Account
from tzjournal.models.trade import Trade
from tzjournal.models.transfer import Transfer

SCHEMA_VERSION = 2


def default_accounts() -> list[Account]:
    """The built-in account every fresh journal starts with."""
    return [Account(id="main", name="Main", type="Real", initial=0.0, balance=0.0)]


class JournalState(BaseModel):
    """The full dataset: accounts, trades and transfers.

    Always written and read back as a single JSON blob.
    """

    version: int = Field(default=SCHEMA_VERSION, description="Schema version")
    accounts: list[Account] = Field(default_factory=default_accounts)
    trades: list[Trade] = Field(default_factory=list)
    transfers: list[Transfer] = Field(default_factory=list)

    model_config = {"frozen": True}

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize using the persisted (camelCase) field names."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def get_account(self, account_id: str) -> Optional[Account]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None


class Preferences(BaseModel):
    """User preferences, persisted separately from the journal state."""

    dark_mode: bool = Field(default=True, alias="darkMode")
    current_account: Optional[str] = Field(default=None, alias="currentAccount")

    model_config = {"frozen": True, "populate_by_name": True}

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
