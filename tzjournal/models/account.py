"""Account data model."""

from pydantic import BaseModel, Field


class Account(BaseModel):
    """Represents a trading account (real, demo, prop...)."""

    id: str = Field(..., min_length=1, description="Stable account identifier")
    name: str = Field(..., description="Display name")
    type: str = Field(default="Real", description="Account type (free text)")
    initial: float = Field(default=0.0, description="Starting equity")
    balance: float = Field(default=0.0, description="Stored balance (not used for equity)")

    model_config = {"frozen": True}
