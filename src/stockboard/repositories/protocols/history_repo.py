"""Price history repository protocol."""

from typing import Protocol, Optional

from stockboard.domain.models import HistoryPriceRecord


class PriceHistoryRepository(Protocol):
    """Interface for append-only price history storage."""

    def existing_keys(
        self,
        codes: list[str],
        dates: list[str],
    ) -> set[tuple[str, str, str]]:
        """Return the (code, date, time) keys already stored for the given codes and dates."""
        ...

    def add_many(self, records: list[HistoryPriceRecord]) -> int:
        """Append records in one transaction; return how many were written."""
        ...

    def list_by_code(
        self,
        code: str,
        date: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[HistoryPriceRecord]:
        """List records for a code, ordered by date then time."""
        ...

    def latest_for_code(self, code: str) -> Optional[HistoryPriceRecord]:
        """Return the most recent record for a code."""
        ...

    def delete_before(self, cutoff_date: str) -> int:
        """Delete all records dated strictly before cutoff_date; return count."""
        ...

    def clear(self) -> None:
        """Delete all records."""
        ...

    def count(self) -> int:
        """Return the number of stored records."""
        ...
