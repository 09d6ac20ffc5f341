"""Market calendar API endpoints."""

from fastapi import APIRouter, Depends

from stockboard.api.deps import get_context
from stockboard.api.schemas import MarketStatusOut
from stockboard.app_context import AppContext
from stockboard.services import market_status

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/status", response_model=MarketStatusOut)
async def get_market_status(ctx: AppContext = Depends(get_context)) -> MarketStatusOut:
    """Whether the market is open now and when it next opens."""
    return MarketStatusOut.model_validate(market_status(ctx.clock.now()))
