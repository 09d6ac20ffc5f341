"""Trade ledger API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from stockboard.api.deps import get_ledger_service
from stockboard.api.schemas import TradeCreateRequest, TradeOut, TradingCostsOut
from stockboard.domain.models import TradeDirection
from stockboard.services import LedgerService, TradeCreate, trading_costs

router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("", response_model=list[TradeOut])
async def list_trades(
    ticker: Optional[str] = Query(None),
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[TradeOut]:
    """List trades oldest first, optionally for one ticker."""
    trades = ledger.list_trades_by_ticker(ticker) if ticker else ledger.list_trades()
    return [TradeOut.model_validate(t) for t in trades]


@router.post("", response_model=TradeOut, status_code=201)
async def create_trade(
    data: TradeCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeOut:
    """Record a trade; fee and tax default to the brokerage rules."""
    trade = ledger.add_trade(
        TradeCreate(
            ticker=data.ticker,
            direction=data.direction,
            price=data.price,
            quantity=data.quantity,
            traded_at=data.traded_at,
            fee=data.fee,
            tax=data.tax,
        )
    )
    return TradeOut.model_validate(trade)


@router.get("/costs", response_model=TradingCostsOut)
async def estimate_costs(
    price: float = Query(..., gt=0),
    quantity: int = Query(..., gt=0),
    direction: TradeDirection = Query(TradeDirection.BUY),
) -> TradingCostsOut:
    """Default fee, tax and net amount for a prospective trade."""
    return TradingCostsOut.model_validate(trading_costs(price, quantity, direction))


@router.get("/{trade_id}", response_model=TradeOut)
async def get_trade(
    trade_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeOut:
    """Get a trade by ID."""
    return TradeOut.model_validate(ledger.get_trade(trade_id))


@router.delete("/{trade_id}", status_code=204)
async def delete_trade(
    trade_id: int,
    ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    """Delete a trade."""
    ledger.delete_trade(trade_id)
    return Response(status_code=204)
