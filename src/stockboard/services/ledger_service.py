"""Ledger service for trade management."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from stockboard.core.clock import Clock
from stockboard.core.exceptions import (
    InsufficientSharesError,
    NotFoundError,
    ValidationError,
)
from stockboard.core.timezone import to_taipei
from stockboard.domain.models import TradeDirection, TradeRecord
from stockboard.repositories.protocols import TradeRepository
from stockboard.services.fees import UserAmount, resolve_trade_costs
from stockboard.services.watchlist_service import normalize_code

logger = logging.getLogger(__name__)


@dataclass
class TradeCreate:
    """Input data for recording a trade. Empty fee/tax means use the default."""

    ticker: str
    direction: TradeDirection
    price: float
    quantity: int
    traded_at: Optional[datetime] = None
    fee: UserAmount = None
    tax: UserAmount = None


class LedgerService:
    """
    Service for managing the trade ledger.

    The ledger is the source of truth for positions. A trade is validated in
    full before it is written, and written in a single transaction.
    """

    def __init__(self, trade_repo: TradeRepository, clock: Clock):
        self._trade_repo = trade_repo
        self._clock = clock

    def add_trade(self, data: TradeCreate) -> TradeRecord:
        """
        Validate and record a trade.

        Fee and tax default to the brokerage rules unless the caller supplied
        a non-empty value.
        """
        ticker = normalize_code(data.ticker)
        direction = self._validate(data)

        if direction == TradeDirection.SELL:
            available = self.holding_quantity(ticker)
            if data.quantity > available:
                raise InsufficientSharesError(ticker, data.quantity, available)

        costs = resolve_trade_costs(data.price, data.quantity, direction, data.fee, data.tax)
        now = self._clock.now()
        trade = TradeRecord(
            ticker=ticker,
            traded_at=to_taipei(data.traded_at) if data.traded_at else now,
            direction=direction,
            price=float(data.price),
            quantity=data.quantity,
            fee=costs.fee,
            tax=costs.tax,
            created_at=now,
            updated_at=now,
        )
        created = self._trade_repo.create(trade)
        logger.info(
            "Recorded %s %s x%d @ %s (fee=%s, tax=%s)",
            direction.value, ticker, data.quantity, data.price, costs.fee, costs.tax,
        )
        return created

    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade from the ledger."""
        self.get_trade(trade_id)
        self._trade_repo.delete(trade_id)
        logger.info("Deleted trade %s", trade_id)

    def get_trade(self, trade_id: int) -> TradeRecord:
        trade = self._trade_repo.get_by_id(trade_id)
        if not trade:
            raise NotFoundError("Trade", str(trade_id))
        return trade

    def list_trades(self) -> list[TradeRecord]:
        """All trades, oldest first."""
        return self._trade_repo.list_all()

    def list_trades_by_ticker(self, ticker: str) -> list[TradeRecord]:
        return self._trade_repo.list_by_ticker(normalize_code(ticker))

    def query_trades(
        self,
        tickers: Optional[list[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[TradeRecord]:
        """Query trades with filters."""
        return self._trade_repo.query(
            tickers=[normalize_code(t) for t in tickers] if tickers else None,
            start_date=start_date,
            end_date=end_date,
        )

    def tickers(self) -> list[str]:
        """Distinct tickers in the ledger, in order of first trade."""
        seen: dict[str, None] = {}
        for trade in self._trade_repo.list_all():
            seen.setdefault(trade.ticker, None)
        return list(seen)

    def holding_quantity(self, ticker: str) -> int:
        """Shares currently held for a ticker."""
        held = 0
        for trade in self._trade_repo.list_by_ticker(normalize_code(ticker)):
            if trade.direction == TradeDirection.BUY:
                held += trade.quantity
            else:
                held -= trade.quantity
        return held

    @staticmethod
    def _validate(data: TradeCreate) -> TradeDirection:
        """Validate trade input; returns the parsed direction."""
        try:
            direction = TradeDirection(data.direction)
        except ValueError:
            raise ValidationError(f"Invalid trade direction: {data.direction!r}")

        if isinstance(data.price, bool) or not isinstance(data.price, (int, float)):
            raise ValidationError("Price must be a number")
        if not math.isfinite(data.price):
            raise ValidationError("Price must be a finite number")
        if data.price <= 0:
            raise ValidationError("Price must be greater than 0")
        if abs(data.price * 100 - round(data.price * 100)) > 1e-6:
            raise ValidationError("Price can have at most two decimal places")

        if isinstance(data.quantity, bool) or not isinstance(data.quantity, int):
            raise ValidationError("Quantity must be a whole number of shares")
        if data.quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        return direction
