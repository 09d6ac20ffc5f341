"""In-memory store of the latest quote per watched ticker."""

from datetime import datetime
from typing import Optional

from stockboard.core.clock import Clock
from stockboard.domain.views import QuoteSnapshot


class StockStore:
    """
    Latest snapshots published by the update loop, plus its status flags.

    Readers get whatever the last successful refresh produced; a failed
    refresh only sets update_error.
    """

    def __init__(self, clock: Clock):
        self._clock = clock
        self._quotes: dict[str, QuoteSnapshot] = {}
        self._last_update_time: Optional[datetime] = None
        self._is_updating = False
        self._update_error: Optional[str] = None

    @property
    def last_update_time(self) -> Optional[datetime]:
        return self._last_update_time

    @property
    def is_updating(self) -> bool:
        return self._is_updating

    @property
    def update_error(self) -> Optional[str]:
        return self._update_error

    def update(self, snapshots: list[QuoteSnapshot]) -> None:
        """Replace the stored snapshots with a refresh result."""
        self._quotes = {s.code: s for s in snapshots}
        self._last_update_time = self._clock.now()
        self._update_error = None

    def set_updating(self, updating: bool, error: Optional[str] = None) -> None:
        self._is_updating = updating
        self._update_error = error

    def get(self, code: str) -> Optional[QuoteSnapshot]:
        return self._quotes.get(code)

    def all(self) -> list[QuoteSnapshot]:
        return list(self._quotes.values())

    def clear(self) -> None:
        self._quotes.clear()
        self._last_update_time = None
        self._is_updating = False
        self._update_error = None
