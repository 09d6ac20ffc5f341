"""Pydantic schemas for trade ledger API."""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from stockboard.domain.models import TradeDirection


class TradeCreateRequest(BaseModel):
    """
    Request to record a trade.

    Leave fee/tax out (or send an empty string) to use the brokerage defaults.
    """

    ticker: str = Field(..., min_length=1)
    direction: TradeDirection
    price: float
    quantity: int
    traded_at: Optional[datetime] = None
    fee: Optional[Union[float, str]] = None
    tax: Optional[Union[float, str]] = None


class TradeOut(BaseModel):
    """Trade response schema."""

    model_config = {"from_attributes": True}

    id: int
    ticker: str
    traded_at: datetime
    direction: TradeDirection
    price: float
    quantity: int
    fee: float
    tax: float
    amount: float
    net_cash_impact: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TradingCostsOut(BaseModel):
    """Fee, tax and net amount for a prospective trade."""

    model_config = {"from_attributes": True}

    fee: float
    tax: float
    total: float
