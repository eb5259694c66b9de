"""Import closed trades from a MetaTrader-style CSV history export.

Expected header columns (extra columns are ignored)::

    Ticket ID, Close Time, Type, Symbol, Profit, Commission, Swap
"""

import csv
import io
import logging
import re
import time
from datetime import datetime
from typing import Optional

from tzjournal.analytics.dates import parse_timestamp
from tzjournal.models import Trade

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Profit", "Commission", "Swap", "Type", "Symbol", "Close Time", "Ticket ID"]

# MetaTrader writes dates with dots
CLOSE_TIME_FORMATS = ["%Y.%m.%d %H:%M:%S", "%Y.%m.%d %H:%M", "%Y.%m.%d"]

THOUSANDS_COMMA = re.compile(r"^[+-]?\d{1,3}(,\d{3})+$")


class ImportFormatError(ValueError):
    """Raised when a file is not a usable trade history export."""


def _normalize_number(text: str) -> str:
    """Resolve thousands separators and decimal commas to a plain float literal."""
    if "," in text and "." in text:
        # whichever separator comes last is the decimal point
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if "," in text:
        if THOUSANDS_COMMA.match(text):
            return text.replace(",", "")
        return text.replace(",", ".")
    return text


def _safe_float(value: Optional[str]) -> Optional[float]:
    """Parse a money cell; None when blank or unreadable.

    Accepts "1,050.00", "1.050,00" and "12,50" (decimal comma).
    """
    if value is None:
        return None
    text = str(value).strip().replace(" ", "")
    if not text:
        return None
    try:
        return float(_normalize_number(text))
    except ValueError:
        return None


def parse_close_time(value: Optional[str]) -> Optional[str]:
    """Normalise a close time cell to an ISO-8601 string."""
    if not value or not value.strip():
        return None
    text = value.strip()
    for fmt in CLOSE_TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).isoformat()
        except ValueError:
            continue
    parsed = parse_timestamp(text)
    return text if parsed else None


def side_from_type(trade_type: Optional[str]) -> str:
    """'sell' anywhere in the type column means a short position."""
    return "Short" if "sell" in (trade_type or "").lower() else "Long"


def parse_trades(text: str, account_id: str) -> list[Trade]:
    """Convert a CSV export into trades for one account.

    Rows without a profit value are skipped silently; rows with an
    unreadable close time are skipped and logged at debug level.

    Args:
        text: CSV file contents, header row first.
        account_id: Account the trades are filed under.

    Returns:
        Trades in file order.

    Raises:
        ImportFormatError: If required header columns are missing.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    if reader.fieldnames is None:
        raise ImportFormatError("File is empty")

    header = {name.strip(): name for name in reader.fieldnames if name}
    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        raise ImportFormatError(f"Missing columns: {', '.join(missing)}")

    def cell(row: dict, column: str) -> Optional[str]:
        return row.get(header[column])

    trades = []
    fallback_id = int(time.time() * 1000)
    for line_no, row in enumerate(reader, start=2):
        profit = _safe_float(cell(row, "Profit"))
        if profit is None:
            continue

        closed_at = parse_close_time(cell(row, "Close Time"))
        if closed_at is None:
            logger.debug("Line %d: unreadable close time %r", line_no, cell(row, "Close Time"))
            continue

        pnl = profit + (_safe_float(cell(row, "Commission")) or 0.0) + (_safe_float(cell(row, "Swap")) or 0.0)
        ticket = (cell(row, "Ticket ID") or "").strip()
        if not ticket:
            ticket = fallback_id
            fallback_id += 1

        trades.append(Trade.create(
            id=ticket,
            account=account_id,
            date=closed_at,
            symbol=(cell(row, "Symbol") or "").strip().upper() or "UNKNOWN",
            side=side_from_type(cell(row, "Type")),
            pnl=pnl,
            notes="Imported",
        ))

    logger.info("Parsed %d trade(s) from CSV", len(trades))
    return trades
