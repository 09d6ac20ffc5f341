"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from stockboard.app_context import AppContext
from stockboard.services import (
    LedgerService,
    PortfolioService,
    PriceHistoryService,
    QuoteCacheService,
    QuoteUpdateScheduler,
    StockStore,
    WatchlistService,
)


def get_context(request: Request) -> AppContext:
    """Provide the application context attached to the app."""
    return request.app.state.context


def get_watchlist_service(ctx: AppContext = Depends(get_context)) -> WatchlistService:
    """Provide WatchlistService instance."""
    return ctx.watchlist


def get_ledger_service(ctx: AppContext = Depends(get_context)) -> LedgerService:
    """Provide LedgerService instance."""
    return ctx.ledger


def get_portfolio_service(ctx: AppContext = Depends(get_context)) -> PortfolioService:
    """Provide PortfolioService instance."""
    return ctx.portfolio


def get_quote_cache(ctx: AppContext = Depends(get_context)) -> QuoteCacheService:
    """Provide QuoteCacheService instance."""
    return ctx.quote_cache


def get_scheduler(ctx: AppContext = Depends(get_context)) -> QuoteUpdateScheduler:
    """Provide QuoteUpdateScheduler instance."""
    return ctx.scheduler


def get_stock_store(ctx: AppContext = Depends(get_context)) -> StockStore:
    """Provide StockStore instance."""
    return ctx.store


def get_history_service(ctx: AppContext = Depends(get_context)) -> PriceHistoryService:
    """Provide PriceHistoryService instance."""
    return ctx.history
