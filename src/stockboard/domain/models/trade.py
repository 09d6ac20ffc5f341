"""Trade ledger domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from stockboard.domain.models.enums import TradeDirection


@dataclass
class TradeRecord:
    """
    Ledger entry for one executed trade (source of truth).

    - price is per share, quantity is a whole number of shares
    - tax only applies to SELL; BUY records carry tax = 0
    - records are never edited in place; corrections are delete + re-add
    """

    ticker: str
    traded_at: datetime
    direction: TradeDirection
    price: float
    quantity: int
    fee: float = 0.0
    tax: float = 0.0
    id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.direction, str):
            self.direction = TradeDirection(self.direction)

    @property
    def amount(self) -> float:
        """Gross trade value, price x quantity."""
        return self.price * self.quantity

    @property
    def net_cash_impact(self) -> float:
        """
        Cash effect of this trade.

        Positive = cash received, Negative = cash paid.
        """
        if self.direction == TradeDirection.BUY:
            return -(self.amount + self.fee)
        return self.amount - self.fee - self.tax
