"""Transfer data model."""

from typing import Literal
from pydantic import BaseModel, Field


class Transfer(BaseModel):
    """A deposit into or withdrawal out of an account."""

    id: int = Field(..., description="Timestamp id")
    account_id: str = Field(..., alias="accountId", description="Account id")
    type: Literal["Deposit", "Withdrawal"] = Field(..., description="Transfer direction")
    amount: float = Field(..., gt=0, description="Transferred amount")
    date: str = Field(..., description="ISO-8601 timestamp")

    model_config = {"frozen": True, "populate_by_name": True}
