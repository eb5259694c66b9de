"""Derived views: account financials, equity curve and calendar buckets."""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class EquityPoint(BaseModel):
    """One point of the running-balance series."""

    label: str = Field(..., description="'Start' or MM/DD of the trade")
    value: float = Field(..., description="Equity after this point")

    model_config = {"frozen": True}


class Financials(BaseModel):
    """Summary metrics for one account."""

    initial: float = Field(..., description="Starting equity")
    account_type: str = Field(..., description="Account type")
    net_pnl: float = Field(..., description="Sum of trade P&L")
    total_deposits: float = Field(..., ge=0)
    total_withdrawals: float = Field(..., ge=0)
    current_equity: float = Field(..., description="Initial + P&L + net transfers")
    growth_pct: float = Field(..., description="Growth relative to initial equity")
    win_rate: int = Field(..., ge=0, le=100, description="Rounded win percentage")
    trade_count: int = Field(..., ge=0)
    winning_trades: int = Field(..., ge=0)
    losing_trades: int = Field(..., ge=0)
    equity_curve: list[EquityPoint] = Field(default_factory=list)

    model_config = {"frozen": True}


class CalendarDay(BaseModel):
    """Trades of one calendar day grouped by symbol."""

    day: int = Field(..., ge=1, le=31)
    by_symbol: dict[str, float] = Field(default_factory=dict)
    day_total: float = Field(default=0.0)
    trade_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def classification(self) -> Optional[Literal["profit", "loss"]]:
        """Heat-map class of the day; None when nothing was traded."""
        if self.trade_count == 0:
            return None
        return "profit" if self.day_total >= 0 else "loss"


class CalendarMonth(BaseModel):
    """A month of calendar days with month-level totals."""

    year: int
    month: int = Field(..., ge=1, le=12)
    leading_blanks: int = Field(..., ge=0, le=6, description="Empty cells before day 1 (Sunday first)")
    days: list[CalendarDay]
    trade_count: int = Field(default=0, ge=0)
    pnl: float = Field(default=0.0)

    model_config = {"frozen": True}
