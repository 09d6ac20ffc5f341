"""Quote API endpoints."""

from fastapi import APIRouter, Depends, Query

from stockboard.api.deps import get_quote_cache, get_scheduler, get_stock_store
from stockboard.api.schemas import CacheStatsOut, QuoteOut, RefreshResult
from stockboard.services import QuoteCacheService, QuoteUpdateScheduler, StockStore

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.get("", response_model=list[QuoteOut])
async def get_quotes(
    codes: str = Query(..., description="Comma-separated ticker codes"),
    cache: QuoteCacheService = Depends(get_quote_cache),
) -> list[QuoteOut]:
    """Quotes for the given codes, served from cache when fresh."""
    snapshots = await cache.get_or_fetch(c for c in codes.split(","))
    return [QuoteOut.model_validate(s) for s in snapshots]


@router.post("/refresh", response_model=RefreshResult)
async def refresh_quotes(
    scheduler: QuoteUpdateScheduler = Depends(get_scheduler),
    store: StockStore = Depends(get_stock_store),
) -> RefreshResult:
    """Refresh the watchlist now, ignoring cache freshness."""
    snapshots = await scheduler.force_refresh()
    return RefreshResult(
        quotes=[QuoteOut.model_validate(s) for s in snapshots],
        last_update_time=store.last_update_time,
        update_error=store.update_error,
    )


@router.get("/cache", response_model=CacheStatsOut)
async def get_cache_stats(cache: QuoteCacheService = Depends(get_quote_cache)) -> CacheStatsOut:
    """Quote cache counters."""
    return CacheStatsOut(**cache.cache_stats())


@router.get("/{code}", response_model=QuoteOut)
async def get_quote(
    code: str,
    cache: QuoteCacheService = Depends(get_quote_cache),
) -> QuoteOut:
    """Quote for a single code."""
    return QuoteOut.model_validate(await cache.get_one(code))
