"""Pydantic schemas for watchlist API."""

from typing import Optional

from pydantic import BaseModel, Field


class WatchlistItemCreate(BaseModel):
    """Request to add a ticker to the watchlist."""

    code: str = Field(..., min_length=1)
    name: Optional[str] = None


class WatchlistItemOut(BaseModel):
    """Watchlist entry in display order."""

    model_config = {"from_attributes": True}

    code: str
    name: str
    index: int


class WatchlistOrder(BaseModel):
    """Full list of codes in the new display order."""

    codes: list[str]
