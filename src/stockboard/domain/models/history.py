"""Price history domain model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class HistoryPriceRecord:
    """
    One locally captured price point.

    Append-only; (code, date, time) identifies a record.
    date is YYYY-MM-DD and time is HH:mm:ss, both Taipei local.
    """

    code: str
    date: str
    time: str
    price: float
    volume: int = 0
    id: Optional[int] = None

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.code, self.date, self.time)
