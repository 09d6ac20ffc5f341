"""Domain layer - pure business models with no external dependencies."""

from stockboard.domain.models import (
    TradeDirection,
    TradeRecord,
    WatchlistItem,
    HistoryPriceRecord,
)

__all__ = [
    "TradeDirection",
    "TradeRecord",
    "WatchlistItem",
    "HistoryPriceRecord",
]
