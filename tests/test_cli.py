"""Tests for the TZ Journal command-line interface.

**Feature: trading-journal**
"""

import json

import pytest
from click.testing import CliRunner

from tzjournal.cli.common import fmt_money, fmt_money_compact, sparkline
from tzjournal.cli.main import LAZY_SUBCOMMANDS, cli
from tzjournal.config import get_db_path, load_config
from tzjournal.db.store import STATE_KEY, DataStore, recovery_key
from tzjournal.journal import Journal


@pytest.fixture
def run(tmp_path):
    """Invoke the CLI against an isolated journal directory."""
    runner = CliRunner()
    env = {"TZJOURNAL_HOME": str(tmp_path), "COLUMNS": "200"}

    def _run(*args, input=None):
        return runner.invoke(cli, list(args), env=env, input=input)

    return _run


def _load_journal(tmp_path) -> Journal:
    journal = Journal(DataStore(tmp_path / "journal.db"))
    journal.load()
    return journal


class TestLazyCommands:
    @pytest.mark.parametrize("name", sorted(LAZY_SUBCOMMANDS))
    def test_every_command_loads(self, run, name: str):
        result = run(name, "--help")
        assert result.exit_code == 0, result.output

    def test_unknown_command(self, run):
        result = run("fly")
        assert result.exit_code != 0


class TestTradeCommands:
    def test_add_and_log(self, run, tmp_path):
        assert run("add", "eurusd", "100", "--date", "2024-03-01T10:00:00").exit_code == 0
        assert run("add", "gbpusd", "--side", "short", "--date", "2024-03-02T10:00:00", "--", "-50").exit_code == 0

        journal = _load_journal(tmp_path)
        assert [t.symbol for t in journal.state.trades] == ["EURUSD", "GBPUSD"]
        assert journal.state.trades[1].side == "Short"
        assert journal.state.trades[1].status == "Loss"

        result = run("log", "--search", "eur")
        assert result.exit_code == 0
        assert "EURUSD" in result.output
        assert "GBPUSD" not in result.output

    def test_add_rejects_bad_date(self, run):
        result = run("add", "EURUSD", "10", "--date", "someday")
        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_oversized_image_still_records_trade(self, run, tmp_path):
        (tmp_path / "config.toml").write_text("[attachments]\nmax_image_bytes = 4\n")
        image = tmp_path / "shot.png"
        image.write_bytes(b"0123456789")

        result = run("add", "EURUSD", "10", "--image", str(image))

        assert result.exit_code == 0
        assert "Image not attached" in result.output
        trade = _load_journal(tmp_path).state.trades[0]
        assert trade.img is None

    def test_show_and_delete(self, run, tmp_path):
        run("add", "XAUUSD", "42", "--notes", "clean breakout")
        trade_id = str(_load_journal(tmp_path).state.trades[0].id)

        shown = run("show", trade_id)
        assert shown.exit_code == 0
        assert "clean breakout" in shown.output

        assert run("delete", trade_id).exit_code == 0
        assert _load_journal(tmp_path).state.trades == []
        assert run("delete", trade_id).exit_code == 1


class TestViews:
    def test_dashboard(self, run, tmp_path):
        run("account", "add", "Funded", "--initial", "1000", "--use")
        run("add", "EURUSD", "100", "--date", "2024-03-01T10:00:00")
        run("add", "EURUSD", "--date", "2024-03-02T10:00:00", "--", "-50")
        run("add", "EURUSD", "200", "--date", "2024-03-03T10:00:00")

        result = run("dashboard", "--curve")

        assert result.exit_code == 0, result.output
        assert "$1,250.00" in result.output
        assert "25.00%" in result.output
        assert "67%" in result.output
        assert "Start" in result.output

    def test_empty_dashboard(self, run):
        result = run("dashboard")
        assert result.exit_code == 0
        assert "equity curve is empty" in result.output

    def test_damaged_data_notice(self, run, tmp_path):
        DataStore(tmp_path / "journal.db").put_blob(STATE_KEY, "{not json")

        result = run("dashboard")

        assert result.exit_code == 0
        assert "could not be read" in result.output
        assert recovery_key("{not json") in result.output

    def test_calendar(self, run):
        run("add", "EURUSD", "80", "--date", "2024-03-15T09:00:00")
        run("add", "EURUSD", "--date", "2024-03-15T11:00:00", "--", "-30")

        result = run("calendar", "--month", "2024-04", "--prev", "1")

        assert result.exit_code == 0, result.output
        assert "March 2024" in result.output
        assert "Trades: 2" in result.output
        assert "$50.00" in result.output

    def test_calendar_bad_month(self, run):
        assert run("calendar", "--month", "2024-13").exit_code == 1
        assert run("calendar", "--month", "March").exit_code == 1


class TestTransfers:
    def test_deposit_withdraw_delete(self, run, tmp_path):
        assert run("deposit", "500").exit_code == 0
        assert run("withdraw", "200", "--date", "2024-03-01").exit_code == 0
        assert run("deposit", "0").exit_code == 1

        listing = run("transfers")
        assert listing.exit_code == 0
        assert "$300.00" in listing.output

        transfer_id = str(_load_journal(tmp_path).state.transfers[0].id)
        assert run("transfers", "delete", transfer_id).exit_code == 0
        assert len(_load_journal(tmp_path).state.transfers) == 1
        assert run("transfers", "delete", "nope").exit_code == 1


class TestAccounts:
    def test_add_use_remove(self, run, tmp_path):
        run("account", "add", "Demo", "--type", "Demo")
        assert run("account", "use", "Demo").exit_code == 0
        assert _load_journal(tmp_path).current_account.name == "Demo"

        listing = run("account", "list")
        assert "Demo" in listing.output
        assert "Main" in listing.output

        assert run("account", "remove", "Demo").exit_code == 0
        assert _load_journal(tmp_path).current_account.name == "Main"
        assert run("account", "use", "Ghost").exit_code == 1


class TestFiles:
    def test_import_csv(self, run, tmp_path):
        csv_file = tmp_path / "history.csv"
        csv_file.write_text(
            "Ticket ID,Close Time,Type,Symbol,Profit,Commission,Swap\n"
            "1001,2024.03.15 10:00:00,buy,eurusd,50,-2,0\n"
            "1002,2024.03.15 11:00:00,sell,eurusd,-20,-2,0\n"
        )

        assert run("import", str(csv_file)).exit_code == 0
        second = run("import", str(csv_file))
        assert "2 already in the journal" in second.output
        assert len(_load_journal(tmp_path).state.trades) == 2

    def test_import_bad_csv(self, run, tmp_path):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("a,b,c\n1,2,3\n")
        result = run("import", str(csv_file))
        assert result.exit_code == 1
        assert "Missing columns" in result.output

    def test_backup_and_restore(self, run, tmp_path):
        run("add", "EURUSD", "10")
        backup_file = tmp_path / "backup.json"
        assert run("backup", str(backup_file)).exit_code == 0
        saved = _load_journal(tmp_path).state

        run("add", "GBPUSD", "20")
        assert run("restore", str(backup_file), "--yes").exit_code == 0
        assert _load_journal(tmp_path).state == saved

    def test_restore_invalid_leaves_state(self, run, tmp_path):
        run("add", "EURUSD", "10")
        bad = tmp_path / "bad.json"
        bad.write_text("{oops")

        result = run("restore", str(bad), "--yes")

        assert result.exit_code == 1
        assert "Invalid backup file" in result.output
        assert len(_load_journal(tmp_path).state.trades) == 1

    def test_restore_cancelled(self, run, tmp_path):
        backup_file = tmp_path / "empty.json"
        backup_file.write_text(json.dumps({"accounts": ["Main"], "trades": [], "transfers": []}))
        run("add", "EURUSD", "10")

        result = run("restore", str(backup_file), input="n\n")

        assert "cancelled" in result.output
        assert len(_load_journal(tmp_path).state.trades) == 1


class TestSettings:
    def test_theme(self, run, tmp_path):
        assert run("theme", "--light").exit_code == 0
        assert _load_journal(tmp_path).prefs.dark_mode is False
        assert "light" in run("theme").output

    def test_config_init_and_show(self, run, tmp_path, monkeypatch):
        assert run("config", "init").exit_code == 0
        assert (tmp_path / "config.toml").exists()

        monkeypatch.setenv("TZJOURNAL_HOME", str(tmp_path))
        config = load_config()
        assert config["display"]["currency"] == "$"
        assert get_db_path(config) == tmp_path / "journal.db"
        assert "max_image_bytes" in run("config", "show").output


class TestFormatting:
    def test_money(self):
        assert fmt_money(1250) == "$1,250.00"
        assert fmt_money(-50.5, "€") == "-€50.50"
        assert fmt_money_compact(1234) == "$1.2k"
        assert fmt_money_compact(-80) == "-$80"

    def test_sparkline(self):
        assert sparkline([]) == ""
        assert sparkline([1, 1, 1]) == "▅▅▅"
        line = sparkline([0, 5, 10])
        assert line[0] == "▁" and line[-1] == "█"
