"""API routers package."""

from stockboard.api.routers.watchlist import router as watchlist_router
from stockboard.api.routers.trades import router as trades_router
from stockboard.api.routers.portfolio import router as portfolio_router
from stockboard.api.routers.quotes import router as quotes_router
from stockboard.api.routers.market import router as market_router
from stockboard.api.routers.history import router as history_router

__all__ = [
    "watchlist_router",
    "trades_router",
    "portfolio_router",
    "quotes_router",
    "market_router",
    "history_router",
]
