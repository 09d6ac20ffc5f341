"""API request/response schemas."""

from stockboard.api.schemas.watchlist import (
    WatchlistItemCreate,
    WatchlistItemOut,
    WatchlistOrder,
)
from stockboard.api.schemas.trade import TradeCreateRequest, TradeOut, TradingCostsOut
from stockboard.api.schemas.portfolio import PositionOut, TotalPnLOut, PortfolioSummaryOut
from stockboard.api.schemas.quote import QuoteOut, RefreshResult, CacheStatsOut, MarketStatusOut
from stockboard.api.schemas.history import HistoryRecordOut, PruneRequest, PruneResult

__all__ = [
    "WatchlistItemCreate",
    "WatchlistItemOut",
    "WatchlistOrder",
    "TradeCreateRequest",
    "TradeOut",
    "TradingCostsOut",
    "PositionOut",
    "TotalPnLOut",
    "PortfolioSummaryOut",
    "QuoteOut",
    "RefreshResult",
    "CacheStatsOut",
    "MarketStatusOut",
    "HistoryRecordOut",
    "PruneRequest",
    "PruneResult",
]
