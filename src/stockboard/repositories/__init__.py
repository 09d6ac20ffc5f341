"""Repository layer - data access abstractions and implementations."""

from stockboard.repositories.protocols import (
    WatchlistRepository,
    TradeRepository,
    PriceHistoryRepository,
)

__all__ = [
    "WatchlistRepository",
    "TradeRepository",
    "PriceHistoryRepository",
]
