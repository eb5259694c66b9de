"""Account-level financial metrics.

All functions are pure and recompute from the full trade list on every call.
"""

import math
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Sequence

from tzjournal.analytics.dates import parse_timestamp
from tzjournal.models import Account, EquityPoint, Financials, Trade, Transfer


def net_pnl(trades: Iterable[Trade]) -> float:
    """Sum of realized P&L."""
    return sum(trade.pnl for trade in trades)


def transfer_totals(transfers: Iterable[Transfer]) -> tuple[float, float]:
    """Return (total deposits, total withdrawals)."""
    deposits = 0.0
    withdrawals = 0.0
    for transfer in transfers:
        if transfer.type == "Deposit":
            deposits += transfer.amount
        elif transfer.type == "Withdrawal":
            withdrawals += transfer.amount
    return deposits, withdrawals


def current_equity(
    initial: float, pnl: float, deposits: float, withdrawals: float
) -> float:
    """Starting capital plus realized P&L plus net transfers."""
    return initial + pnl + deposits - withdrawals


def growth_pct(initial: float, equity: float) -> float:
    """Percentage change of equity against starting capital.

    Accounts without starting capital report 0 growth.
    """
    if initial > 0:
        return (equity - initial) / initial * 100
    return 0.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def win_rate(trades: Sequence[Trade]) -> int:
    """Share of strictly profitable trades, as a whole percentage."""
    if not trades:
        return 0
    wins = sum(1 for trade in trades if trade.pnl > 0)
    return _round_half_up(wins / len(trades) * 100)


def _sort_key(trade: Trade, tz: Optional[tzinfo]) -> datetime:
    return parse_timestamp(trade.date, tz) or datetime.min


def equity_curve(
    trades: Sequence[Trade], initial: float, tz: Optional[tzinfo] = None
) -> list[EquityPoint]:
    """Running balance after each trade, oldest first.

    Args:
        trades: Trades of one account, in any order.
        initial: Starting equity.
        tz: Zone aware timestamps are compared in. Defaults to local time.

    Returns:
        A 'Start' point followed by one point per trade, or an empty list
        when there are no trades.
    """
    if not trades:
        return []

    ordered = sorted(trades, key=lambda t: _sort_key(t, tz))
    points = [EquityPoint(label="Start", value=initial)]
    running = initial
    for trade in ordered:
        running += trade.pnl
        stamp = parse_timestamp(trade.date, tz)
        label = stamp.strftime("%m/%d") if stamp else "--/--"
        points.append(EquityPoint(label=label, value=running))
    return points


def compute_financials(
    trades: Sequence[Trade],
    transfers: Sequence[Transfer],
    account: Account,
    tz: Optional[tzinfo] = None,
) -> Financials:
    """Compute the dashboard metrics for one account.

    Args:
        trades: The account's trades.
        transfers: The account's deposits and withdrawals.
        account: The account itself (for starting capital and type).
        tz: Zone used to order trades on the equity curve.

    Returns:
        Financials for the account.
    """
    initial = account.initial or 0.0
    pnl = net_pnl(trades)
    deposits, withdrawals = transfer_totals(transfers)
    equity = current_equity(initial, pnl, deposits, withdrawals)

    return Financials(
        initial=initial,
        account_type=account.type,
        net_pnl=pnl,
        total_deposits=deposits,
        total_withdrawals=withdrawals,
        current_equity=equity,
        growth_pct=growth_pct(initial, equity),
        win_rate=win_rate(trades),
        trade_count=len(trades),
        winning_trades=sum(1 for t in trades if t.pnl > 0),
        losing_trades=sum(1 for t in trades if t.pnl < 0),
        equity_curve=equity_curve(trades, initial, tz),
    )


def search_trades(
    trades: Iterable[Trade], query: str = "", tz: Optional[tzinfo] = None
) -> list[Trade]:
    """Trade log: newest first, filtered by a case-insensitive symbol match."""
    needle = query.strip().lower()
    ordered = sorted(trades, key=lambda t: _sort_key(t, tz), reverse=True)
    if not needle:
        return ordered
    return [t for t in ordered if needle in t.symbol.lower()]
