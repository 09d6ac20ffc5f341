"""Business logic services."""

from stockboard.services.fees import (
    brokerage_fee,
    transaction_tax,
    trading_costs,
    estimate_sell_costs,
    resolve_trade_costs,
)
from stockboard.services.market_calendar import is_open, next_open, market_status
from stockboard.services.pnl_engine import PnlEngine
from stockboard.services.quote_cache import QuoteCacheService, batch_key
from stockboard.services.stock_store import StockStore
from stockboard.services.watchlist_service import WatchlistService
from stockboard.services.ledger_service import LedgerService, TradeCreate
from stockboard.services.history_service import PriceHistoryService
from stockboard.services.portfolio_service import PortfolioService
from stockboard.services.scheduler import QuoteUpdateScheduler, SchedulerState

__all__ = [
    "brokerage_fee",
    "transaction_tax",
    "trading_costs",
    "estimate_sell_costs",
    "resolve_trade_costs",
    "is_open",
    "next_open",
    "market_status",
    "PnlEngine",
    "QuoteCacheService",
    "batch_key",
    "StockStore",
    "WatchlistService",
    "LedgerService",
    "TradeCreate",
    "PriceHistoryService",
    "PortfolioService",
    "QuoteUpdateScheduler",
    "SchedulerState",
]
