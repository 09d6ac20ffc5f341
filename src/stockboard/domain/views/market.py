"""Market calendar and price-history views."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class MarketStatus:
    """Whether the market is open at as_of, and when it next opens."""

    is_open: bool
    next_open: datetime
    as_of: datetime


@dataclass
class HistoryRecordResult:
    """Outcome of writing a batch of snapshots to the price history."""

    saved: int = 0
    skipped_duplicates: int = 0
