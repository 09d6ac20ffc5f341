"""View models for positions and profit/loss outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class StockPosition:
    """
    Derived holdings and PnL for one ticker.

    Recomputed from the full ledger plus the latest quote; never persisted.
    """

    ticker: str
    stock_name: str
    total_buy_quantity: int = 0
    total_sell_quantity: int = 0
    holding_quantity: int = 0
    avg_buy_price: float = 0.0
    total_buy_amount: float = 0.0  # including buy-side fees
    total_sell_amount: float = 0.0  # net of sell-side fees and tax
    total_sold_cost: float = 0.0  # average cost of the shares sold
    realized_pnl: float = 0.0
    unrealized_pnl: float = 0.0
    current_price: float = 0.0
    market_value: float = 0.0
    total_fees: float = 0.0
    total_tax: float = 0.0


@dataclass
class TotalPnL:
    """Field-wise totals across all positions."""

    total_realized_pnl: float = 0.0
    total_unrealized_pnl: float = 0.0
    total_pnl: float = 0.0
    total_investment: float = 0.0
    current_market_value: float = 0.0
    total_fees: float = 0.0
    total_tax: float = 0.0

    @property
    def return_percent(self) -> float:
        """Total PnL as a percentage of the total invested amount."""
        if self.total_investment == 0:
            return 0.0
        return self.total_pnl / self.total_investment * 100


@dataclass
class TradingCosts:
    """Fee, tax and net cash amount for a prospective trade."""

    fee: float
    tax: float
    total: float  # BUY: amount + fee, SELL: amount - fee - tax


@dataclass
class PortfolioSummary:
    """Positions plus totals, with a transient flag when quotes could not be refreshed."""

    positions: list[StockPosition] = field(default_factory=list)
    total: TotalPnL = field(default_factory=TotalPnL)
    as_of: Optional[datetime] = None
    quote_error: Optional[str] = None
