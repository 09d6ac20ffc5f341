"""Watchlist management service."""

import logging
import re
from typing import Callable, Optional

from stockboard.core.exceptions import NotFoundError, ValidationError
from stockboard.domain.models import WatchlistItem
from stockboard.repositories.protocols import WatchlistRepository

logger = logging.getLogger(__name__)

TICKER_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

WatchlistListener = Callable[[list[WatchlistItem]], None]


def normalize_code(code: str) -> str:
    """Validate a ticker code and return it upper-cased."""
    code = (code or "").strip()
    if not code or not TICKER_PATTERN.match(code):
        raise ValidationError(f"Invalid ticker code: {code!r}")
    return code.upper()


class WatchlistService:
    """
    Ordered watchlist backed by persistent storage.

    The in-memory list is only replaced after storage accepts a change, so a
    StorageError leaves it as it was.
    """

    def __init__(self, repo: WatchlistRepository):
        self._repo = repo
        self._items: list[WatchlistItem] = []
        self._listeners: list[WatchlistListener] = []

    def initialize(self) -> list[WatchlistItem]:
        """Load the ordered list from storage."""
        self._items = self._repo.list_ordered()
        logger.info("Loaded watchlist with %d items", len(self._items))
        return self.items()

    def add(self, code: str, name: Optional[str] = None) -> WatchlistItem:
        """Append a ticker at the end of the list."""
        code = normalize_code(code)
        if self.contains(code):
            raise ValidationError(f"{code} is already on the watchlist")

        next_index = max((i.index for i in self._items), default=-1) + 1
        item = self._repo.add(WatchlistItem(code=code, name=(name or code).strip(), index=next_index))
        self._items = self._items + [item]
        self._notify()
        return item

    def remove(self, code: str) -> None:
        """Remove a ticker; remaining indices are renumbered from zero."""
        code = normalize_code(code)
        if not self.contains(code):
            raise NotFoundError("Watchlist item", code)
        self._items = self._repo.delete_and_renumber(code)
        self._notify()

    def reorder(self, codes: list[str]) -> list[WatchlistItem]:
        """Rewrite indices to follow ``codes``, which must be a permutation of the list."""
        normalized = [normalize_code(c) for c in codes]
        current = {i.code: i for i in self._items}
        if len(set(normalized)) != len(normalized) or set(normalized) != set(current):
            raise ValidationError("Reorder must list every watchlist code exactly once")

        reordered = [
            WatchlistItem(code=c, name=current[c].name, index=index)
            for index, c in enumerate(normalized)
        ]
        self._items = self._repo.replace_all(reordered)
        self._notify()
        return self.items()

    def update_name(self, code: str, name: str) -> None:
        """Record the display name reported by the quote source."""
        item = next((i for i in self._items if i.code == code), None)
        if item is None or not name or item.name == name:
            return
        updated = [
            WatchlistItem(code=i.code, name=name if i.code == code else i.name, index=i.index)
            for i in self._items
        ]
        self._items = self._repo.replace_all(updated)

    def codes(self) -> list[str]:
        return [i.code for i in self._items]

    def items(self) -> list[WatchlistItem]:
        return list(self._items)

    def contains(self, code: str) -> bool:
        return any(i.code == code for i in self._items)

    def on_change(self, listener: WatchlistListener) -> Callable[[], None]:
        """Subscribe to list changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.items()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Watchlist listener failed")
