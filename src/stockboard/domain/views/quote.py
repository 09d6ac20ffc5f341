"""Quote snapshot and cache entry views."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from stockboard.core.timezone import from_epoch_millis

# Current price placeholder when the source has not printed a trade yet
UNAVAILABLE_PRICE = -1.0


@dataclass(frozen=True)
class QuoteSnapshot:
    """
    Point-in-time quote for one ticker, as normalized from the upstream source.

    change and change_percent are always derived from current/yesterday prices.
    """

    code: str
    name: str
    current_price: float
    yesterday_price: float
    open_price: float = 0.0
    high_price: float = 0.0
    low_price: float = 0.0
    volume: int = 0
    total_volume: int = 0
    trading_date: str = ""
    trading_time: str = ""
    timestamp: int = 0  # epoch milliseconds reported by the source

    @property
    def is_price_available(self) -> bool:
        return self.current_price > 0

    @property
    def change(self) -> float:
        if not self.is_price_available:
            return 0.0
        return self.current_price - self.yesterday_price

    @property
    def change_percent(self) -> float:
        if self.yesterday_price <= 0:
            return 0.0
        return self.change / self.yesterday_price * 100

    @property
    def updated_at(self) -> datetime:
        return from_epoch_millis(self.timestamp)


@dataclass
class CacheEntry:
    """Last-known snapshot for a ticker plus the wall-clock time it was fetched."""

    snapshot: QuoteSnapshot
    fetched_at: Optional[datetime] = None

    def is_fresh(self, now: datetime, window_seconds: float) -> bool:
        if self.fetched_at is None:
            return False
        return (now - self.fetched_at).total_seconds() < window_seconds
