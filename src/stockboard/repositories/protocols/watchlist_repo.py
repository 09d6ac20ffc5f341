"""Watchlist repository protocol."""

from typing import Protocol, Optional

from stockboard.domain.models import WatchlistItem


class WatchlistRepository(Protocol):
    """Interface for watchlist data access."""

    def list_ordered(self) -> list[WatchlistItem]:
        """List all items ordered by index."""
        ...

    def get(self, code: str) -> Optional[WatchlistItem]:
        """Retrieve an item by code."""
        ...

    def add(self, item: WatchlistItem) -> WatchlistItem:
        """Persist a new item."""
        ...

    def delete_and_renumber(self, code: str) -> list[WatchlistItem]:
        """Delete an item and renumber the rest contiguously, in one transaction."""
        ...

    def replace_all(self, items: list[WatchlistItem]) -> list[WatchlistItem]:
        """Rewrite the indices of the given items, in one transaction."""
        ...
