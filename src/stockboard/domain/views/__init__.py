"""View models for service outputs."""

from stockboard.domain.views.quote import QuoteSnapshot, CacheEntry, UNAVAILABLE_PRICE
from stockboard.domain.views.portfolio import (
    StockPosition,
    TotalPnL,
    TradingCosts,
    PortfolioSummary,
)
from stockboard.domain.views.market import MarketStatus, HistoryRecordResult

__all__ = [
    "QuoteSnapshot",
    "CacheEntry",
    "UNAVAILABLE_PRICE",
    "StockPosition",
    "TotalPnL",
    "TradingCosts",
    "PortfolioSummary",
    "MarketStatus",
    "HistoryRecordResult",
]
