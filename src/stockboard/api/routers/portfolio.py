"""Portfolio API endpoints."""

from fastapi import APIRouter, Depends

from stockboard.api.deps import get_portfolio_service
from stockboard.api.schemas import PortfolioSummaryOut, PositionOut
from stockboard.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/positions", response_model=list[PositionOut])
async def get_positions(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> list[PositionOut]:
    """Per-ticker holdings and PnL at current prices."""
    positions = await portfolio.get_positions()
    return [PositionOut.model_validate(p) for p in positions]


@router.get("/summary", response_model=PortfolioSummaryOut)
async def get_summary(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioSummaryOut:
    """Positions plus totals. quote_error is set when prices are stale."""
    summary = await portfolio.get_summary()
    return PortfolioSummaryOut.model_validate(summary)
