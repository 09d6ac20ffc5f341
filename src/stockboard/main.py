"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockboard.api.routers import (
    history_router,
    market_router,
    portfolio_router,
    quotes_router,
    trades_router,
    watchlist_router,
)
from stockboard.app_context import AppContext
from stockboard.config.logging_config import setup_logging
from stockboard.core.exceptions import AppError

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the ASGI app around an application context."""
    ctx = context or AppContext()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging(ctx.settings)
        ctx.initialize()
        if ctx.settings.auto_refresh:
            await ctx.scheduler.start()
        yield
        # Shutdown
        await ctx.aclose()

    app = FastAPI(
        title=ctx.settings.app_name,
        description="Taiwan stock watchlist, trade ledger and PnL tracking",
        version=ctx.settings.app_version,
        lifespan=lifespan,
    )
    app.state.context = ctx

    # Include routers
    app.include_router(watchlist_router)
    app.include_router(trades_router)
    app.include_router(portfolio_router)
    app.include_router(quotes_router)
    app.include_router(market_router)
    app.include_router(history_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "scheduler": ctx.scheduler.state.value}

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": ctx.settings.app_name,
            "version": ctx.settings.app_version,
            "docs": "/docs",
        }

    return app
