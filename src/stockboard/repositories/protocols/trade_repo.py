"""Trade repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from stockboard.domain.models import TradeRecord


class TradeRepository(Protocol):
    """Interface for trade ledger data access."""

    def create(self, trade: TradeRecord) -> TradeRecord:
        """Persist a new trade and return it with its assigned id."""
        ...

    def get_by_id(self, trade_id: int) -> Optional[TradeRecord]:
        """Retrieve a trade by ID."""
        ...

    def delete(self, trade_id: int) -> None:
        """Delete a trade."""
        ...

    def list_all(self) -> list[TradeRecord]:
        """List all trades ordered by traded_at (ties by id)."""
        ...

    def list_by_ticker(self, ticker: str) -> list[TradeRecord]:
        """List trades for one ticker ordered by traded_at."""
        ...

    def query(
        self,
        tickers: Optional[list[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[TradeRecord]:
        """Query trades with filters, ordered by traded_at."""
        ...
