"""Watchlist domain model."""

from dataclasses import dataclass


@dataclass
class WatchlistItem:
    """A ticker on the user's watchlist; index is the dense zero-based display order."""

    code: str
    name: str
    index: int = 0
