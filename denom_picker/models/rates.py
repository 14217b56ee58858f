from __future__ import annotations

from pydantic import BaseModel, Field


class ManualRateIn(BaseModel):
    # Free-form text; parsing and validation happen in RateProvider.set_manual
    text: str = Field(..., description="BTC/USD rate as typed by the user")
