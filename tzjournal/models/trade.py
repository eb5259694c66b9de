"""Trade data model."""

from typing import Literal, Optional, Union
from pydantic import BaseModel, Field


def derive_status(pnl: float) -> str:
    """Return the stored status for a realized P&L (break-even counts as a win)."""
    return "Win" if pnl >= 0 else "Loss"


class Trade(BaseModel):
    """Represents a single closed position."""

    id: Union[int, str] = Field(..., description="Timestamp id or imported ticket id")
    account: str = Field(..., description="Owning account id")
    date: str = Field(..., description="ISO-8601 close timestamp")
    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    side: Literal["Long", "Short"] = Field(..., description="Trade direction")
    pnl: float = Field(..., description="Realized P&L")
    status: Literal["Win", "Loss"] = Field(..., description="Win iff pnl >= 0")
    notes: str = Field(default="", description="Free-form notes")
    img: Optional[str] = Field(default=None, description="Screenshot data URI or URL")

    model_config = {"frozen": True}

    @classmethod
    def create(
        cls,
        id: Union[int, str],
        account: str,
        date: str,
        symbol: str,
        side: str,
        pnl: float,
        notes: str = "",
        img: Optional[str] = None,
    ) -> "Trade":
        """Build a trade with its status derived from pnl."""
        return cls(
            id=id,
            account=account,
            date=date,
            symbol=symbol,
            side=side,
            pnl=pnl,
            status=derive_status(pnl),
            notes=notes,
            img=img,
        )
