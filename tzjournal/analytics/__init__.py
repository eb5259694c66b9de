"""Derived views over the journal: account financials and calendar buckets."""

from tzjournal.analytics.calendar_grid import bucket_month, shift_month
from tzjournal.analytics.financials import (
    compute_financials,
    current_equity,
    equity_curve,
    growth_pct,
    net_pnl,
    search_trades,
    transfer_totals,
    win_rate,
)

__all__ = [
    "bucket_month",
    "shift_month",
    "compute_financials",
    "current_equity",
    "equity_curve",
    "growth_pct",
    "net_pnl",
    "search_trades",
    "transfer_totals",
    "win_rate",
]
