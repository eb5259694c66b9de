"""Monthly calendar buckets: per-day P&L grouped by symbol."""

import calendar
from datetime import tzinfo
from typing import Iterable, Optional

from tzjournal.analytics.dates import trade_day
from tzjournal.models import CalendarDay, CalendarMonth, Trade


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def bucket_month(
    trades: Iterable[Trade],
    year: int,
    month: int,
    tz: Optional[tzinfo] = None,
) -> CalendarMonth:
    """Group an account's trades into the days of one month.

    Args:
        trades: The account's trades (any month).
        year: Calendar year.
        month: Calendar month, 1-12.
        tz: Zone aware timestamps are converted to before taking the date.

    Returns:
        CalendarMonth with one CalendarDay per day of the month.
    """
    first_weekday, days_in_month = calendar.monthrange(year, month)
    by_day: dict[int, list[Trade]] = {}
    for trade in trades:
        day = trade_day(trade.date, tz)
        if day is None or day.year != year or day.month != month:
            continue
        by_day.setdefault(day.day, []).append(trade)

    days = []
    month_pnl = 0.0
    month_trades = 0
    for day_number in range(1, days_in_month + 1):
        day_trades = by_day.get(day_number, [])
        grouped: dict[str, float] = {}
        total = 0.0
        for trade in day_trades:
            grouped[trade.symbol] = grouped.get(trade.symbol, 0.0) + trade.pnl
            total += trade.pnl

        month_pnl += total
        month_trades += len(day_trades)
        days.append(CalendarDay(
            day=day_number,
            by_symbol=grouped,
            day_total=total,
            trade_count=len(day_trades),
        ))

    return CalendarMonth(
        year=year,
        month=month,
        # monthrange counts Monday as 0; the grid starts on Sunday
        leading_blanks=(first_weekday + 1) % 7,
        days=days,
        trade_count=month_trades,
        pnl=month_pnl,
    )

