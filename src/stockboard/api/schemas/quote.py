"""Pydantic schemas for quote and market API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class QuoteOut(BaseModel):
    """Quote snapshot for one ticker."""

    model_config = {"from_attributes": True}

    code: str
    name: str
    current_price: float
    yesterday_price: float
    open_price: float
    high_price: float
    low_price: float
    volume: int
    total_volume: int
    trading_date: str
    trading_time: str
    timestamp: int
    change: float
    change_percent: float
    is_price_available: bool


class RefreshResult(BaseModel):
    """Outcome of a forced watchlist refresh."""

    quotes: list[QuoteOut]
    last_update_time: Optional[datetime] = None
    update_error: Optional[str] = None


class CacheStatsOut(BaseModel):
    """Quote cache counters."""

    cached_quotes: int
    fresh_quotes: int
    pending_requests: int


class MarketStatusOut(BaseModel):
    """Trading-hours state."""

    model_config = {"from_attributes": True}

    is_open: bool
    next_open: datetime
    as_of: datetime
