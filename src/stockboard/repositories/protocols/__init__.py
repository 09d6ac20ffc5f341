"""Repository protocol definitions (interfaces)."""

from stockboard.repositories.protocols.watchlist_repo import WatchlistRepository
from stockboard.repositories.protocols.trade_repo import TradeRepository
from stockboard.repositories.protocols.history_repo import PriceHistoryRepository

__all__ = [
    "WatchlistRepository",
    "TradeRepository",
    "PriceHistoryRepository",
]
