"""Property-based tests for account financials.

**Feature: trading-journal**
"""

from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

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
from tzjournal.models import Account, Trade, Transfer


money = st.floats(min_value=-100000.0, max_value=100000.0, allow_nan=False, allow_infinity=False)


def trade_strategy():
    """Generate valid Trade objects for testing."""
    return st.builds(
        Trade.create,
        id=st.integers(min_value=1, max_value=2**53),
        account=st.just("main"),
        date=st.datetimes(
            min_value=datetime(2020, 1, 1),
            max_value=datetime(2025, 12, 31),
        ).map(lambda d: d.isoformat()),
        symbol=st.sampled_from(["EURUSD", "GBPUSD", "XAUUSD", "US30", "BTCUSD"]),
        side=st.sampled_from(["Long", "Short"]),
        pnl=money,
    )


def _make_transfer(id, account_id, type, amount, date):
    return Transfer(id=id, account_id=account_id, type=type, amount=amount, date=date)


def transfer_strategy():
    return st.builds(
        _make_transfer,
        id=st.integers(min_value=1, max_value=2**53),
        account_id=st.just("main"),
        type=st.sampled_from(["Deposit", "Withdrawal"]),
        amount=st.floats(min_value=0.01, max_value=100000.0, allow_nan=False, allow_infinity=False),
        date=st.just("2024-01-01T00:00:00"),
    )


def _trade(pnl: float, date: str = "2024-03-01T10:00:00", symbol: str = "EURUSD", id: int = 1) -> Trade:
    return Trade.create(id=id, account="main", date=date, symbol=symbol, side="Long", pnl=pnl)


class TestNetPnL:
    """
    *For any* set of trades, net P&L equals the sum of individual trade
    P&Ls and does not depend on their order.
    """

    @given(trades=st.lists(trade_strategy(), max_size=50))
    @settings(max_examples=100)
    def test_net_pnl_is_sum(self, trades: list[Trade]):
        assert net_pnl(trades) == pytest.approx(sum(t.pnl for t in trades), abs=0.01)

    @given(trades=st.lists(trade_strategy(), max_size=50), data=st.data())
    @settings(max_examples=50)
    def test_net_pnl_order_invariant(self, trades: list[Trade], data):
        shuffled = data.draw(st.permutations(trades))
        assert net_pnl(shuffled) == pytest.approx(net_pnl(trades), abs=0.01)


class TestEquity:
    """
    *For any* trades and transfers, current equity is initial + net P&L
    + deposits - withdrawals.
    """

    @given(
        trades=st.lists(trade_strategy(), max_size=30),
        transfers=st.lists(transfer_strategy(), max_size=10),
        initial=st.floats(min_value=0, max_value=1_000_000, allow_nan=False, allow_infinity=False),
    )
    @settings(max_examples=100)
    def test_equity_identity(self, trades, transfers, initial):
        account = Account(id="main", name="Main", initial=initial)
        result = compute_financials(trades, transfers, account)

        deposits = sum(t.amount for t in transfers if t.type == "Deposit")
        withdrawals = sum(t.amount for t in transfers if t.type == "Withdrawal")
        expected = initial + sum(t.pnl for t in trades) + deposits - withdrawals

        assert result.current_equity == pytest.approx(expected, abs=0.01)

    @given(initial=st.floats(min_value=0, max_value=1_000_000, allow_nan=False, allow_infinity=False))
    def test_empty_account_equity_is_initial(self, initial: float):
        account = Account(id="main", name="Main", initial=initial)
        result = compute_financials([], [], account)

        assert result.current_equity == initial
        assert result.growth_pct == 0
        assert result.win_rate == 0
        assert result.equity_curve == []

    def test_transfer_totals(self):
        transfers = [
            Transfer(id=1, account_id="main", type="Deposit", amount=500, date="2024-01-01"),
            Transfer(id=2, account_id="main", type="Deposit", amount=250, date="2024-01-02"),
            Transfer(id=3, account_id="main", type="Withdrawal", amount=100, date="2024-01-03"),
        ]
        assert transfer_totals(transfers) == (750, 100)
        assert current_equity(1000, 50, 750, 100) == 1700


class TestGrowth:
    """*For any* account without starting capital, growth is 0."""

    @given(
        initial=st.floats(min_value=-1000, max_value=0, allow_nan=False),
        equity=money,
    )
    def test_growth_guarded_without_capital(self, initial: float, equity: float):
        assert growth_pct(initial, equity) == 0

    def test_growth_percentage(self):
        assert growth_pct(1000, 1250) == pytest.approx(25.0)
        assert growth_pct(1000, 900) == pytest.approx(-10.0)


class TestWinRate:
    """Win rate counts strictly positive trades and rounds halves up."""

    def test_break_even_is_not_a_win(self):
        trades = [_trade(0), _trade(10)]
        assert win_rate(trades) == 50

    def test_rounds_half_up(self):
        # 1 of 8 = 12.5%
        trades = [_trade(10)] + [_trade(-1) for _ in range(7)]
        assert win_rate(trades) == 13

    def test_no_trades(self):
        assert win_rate([]) == 0


class TestEquityCurve:
    """
    *For any* non-empty trade list, the curve has one point per trade plus
    a start point; an empty list gives an empty curve.
    """

    @given(
        trades=st.lists(trade_strategy(), max_size=40),
        initial=st.floats(min_value=0, max_value=100000, allow_nan=False),
    )
    @settings(max_examples=100)
    def test_curve_length(self, trades: list[Trade], initial: float):
        curve = equity_curve(trades, initial)
        if trades:
            assert len(curve) == len(trades) + 1
            assert curve[0].label == "Start"
            assert curve[0].value == initial
            assert curve[-1].value == pytest.approx(initial + net_pnl(trades), abs=0.01)
        else:
            assert curve == []

    def test_curve_follows_dates(self):
        trades = [
            _trade(200, "2024-03-05T09:00:00", id=3),
            _trade(100, "2024-03-01T09:00:00", id=1),
            _trade(-50, "2024-03-02T09:00:00", id=2),
        ]
        curve = equity_curve(trades, 1000)

        assert [p.label for p in curve] == ["Start", "03/01", "03/02", "03/05"]
        assert [p.value for p in curve] == [1000, 1100, 1050, 1250]


class TestExampleScenarios:
    def test_account_with_three_trades(self):
        account = Account(id="main", name="Main", initial=1000)
        trades = [_trade(100, id=1), _trade(-50, id=2), _trade(200, id=3)]

        result = compute_financials(trades, [], account)

        assert result.net_pnl == 250
        assert result.current_equity == 1250
        assert round(result.growth_pct, 2) == 25.00
        assert result.win_rate == 67
        assert result.winning_trades == 2
        assert result.losing_trades == 1

    def test_deposit_without_starting_capital(self):
        account = Account(id="main", name="Main", initial=0)
        transfers = [Transfer(id=1, account_id="main", type="Deposit", amount=500, date="2024-01-01")]

        result = compute_financials([], transfers, account)

        assert result.current_equity == 500
        assert result.growth_pct == 0


class TestSearchTrades:
    def test_newest_first_and_filtered(self):
        trades = [
            _trade(10, "2024-03-01T09:00:00", "EURUSD", id=1),
            _trade(20, "2024-03-03T09:00:00", "GBPUSD", id=2),
            _trade(30, "2024-03-02T09:00:00", "EURGBP", id=3),
        ]

        assert [t.id for t in search_trades(trades)] == [2, 3, 1]
        assert [t.id for t in search_trades(trades, "eur")] == [3, 1]
        assert search_trades(trades, "XAU") == []
