"""Domain models package."""

from stockboard.domain.models.enums import TradeDirection
from stockboard.domain.models.trade import TradeRecord
from stockboard.domain.models.watchlist import WatchlistItem
from stockboard.domain.models.history import HistoryPriceRecord

__all__ = [
    "TradeDirection",
    "TradeRecord",
    "WatchlistItem",
    "HistoryPriceRecord",
]
