"""Data models for TZ Journal."""

from tzjournal.models.account import Account
from tzjournal.models.trade import Trade, derive_status
from tzjournal.models.transfer import Transfer
from tzjournal.models.state import JournalState, Preferences, SCHEMA_VERSION
from tzjournal.models.report import (
    CalendarDay,
    CalendarMonth,
    EquityPoint,
    Financials,
)

__all__ = [
    "Account",
    "Trade",
    "derive_status",
    "Transfer",
    "JournalState",
    "Preferences",
    "SCHEMA_VERSION",
    "CalendarDay",
    "CalendarMonth",
    "EquityPoint",
    "Financials",
]
