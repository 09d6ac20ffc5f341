"""Pydantic schemas for portfolio API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PositionOut(BaseModel):
    """Holdings and PnL for one ticker."""

    model_config = {"from_attributes": True}

    ticker: str
    stock_name: str
    total_buy_quantity: int
    total_sell_quantity: int
    holding_quantity: int
    avg_buy_price: float
    total_buy_amount: float
    total_sell_amount: float
    total_sold_cost: float
    realized_pnl: float
    unrealized_pnl: float
    current_price: float
    market_value: float
    total_fees: float
    total_tax: float


class TotalPnLOut(BaseModel):
    """Totals across all positions."""

    model_config = {"from_attributes": True}

    total_realized_pnl: float
    total_unrealized_pnl: float
    total_pnl: float
    total_investment: float
    current_market_value: float
    total_fees: float
    total_tax: float
    return_percent: float


class PortfolioSummaryOut(BaseModel):
    """Positions plus totals; quote_error is set when prices could not be refreshed."""

    model_config = {"from_attributes": True}

    positions: list[PositionOut]
    total: TotalPnLOut
    as_of: Optional[datetime] = None
    quote_error: Optional[str] = None
