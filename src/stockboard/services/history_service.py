"""Local price history: best-effort capture of intraday quote points."""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

from stockboard.core.clock import Clock
from stockboard.core.exceptions import ValidationError
from stockboard.core.timezone import from_epoch_millis, parse_datetime_taipei, to_taipei
from stockboard.domain.models import HistoryPriceRecord
from stockboard.domain.views import HistoryRecordResult, QuoteSnapshot
from stockboard.repositories.protocols import PriceHistoryRepository

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

DateLike = Union[date, datetime, str]


class PriceHistoryService:
    """
    Append-only history of captured prices keyed by (code, date, time).

    Keeps an in-memory mirror of the records loaded or written during this
    process, so pruning has to clear both.
    """

    def __init__(
        self,
        repo: PriceHistoryRepository,
        clock: Clock,
        retention_days: int = 3,
    ):
        self._repo = repo
        self._clock = clock
        self._retention_days = retention_days
        self._mirror: dict[str, list[HistoryPriceRecord]] = {}

    async def record(self, snapshots: list[QuoteSnapshot]) -> HistoryRecordResult:
        """
        Store one record per snapshot, skipping keys that already exist.

        Snapshots without a usable price are ignored.
        """
        records = [self._to_record(s) for s in snapshots if s.is_price_available]
        if not records:
            return HistoryRecordResult()

        seen = self._repo.existing_keys(
            sorted({r.code for r in records}),
            sorted({r.date for r in records}),
        )
        new_records: list[HistoryPriceRecord] = []
        skipped = 0
        for record in records:
            if record.key in seen:
                skipped += 1
                continue
            seen.add(record.key)
            new_records.append(record)

        saved = self._repo.add_many(new_records)
        for record in new_records:
            self._mirror.setdefault(record.code, []).append(record)

        if skipped:
            logger.debug("Skipped %d duplicate history records", skipped)
        return HistoryRecordResult(saved=saved, skipped_duplicates=skipped)

    async def prune(self, older_than: Optional[DateLike] = None) -> int:
        """Delete records dated before the cutoff (default: now minus retention days)."""
        cutoff = self._format_date(older_than) if older_than else self._default_cutoff()
        deleted = self._repo.delete_before(cutoff)

        for code, records in list(self._mirror.items()):
            kept = [r for r in records if r.date >= cutoff]
            if kept:
                self._mirror[code] = kept
            else:
                del self._mirror[code]

        logger.info("Pruned %d history records older than %s", deleted, cutoff)
        return deleted

    def load_history(self, code: str, day: Optional[DateLike] = None) -> list[HistoryPriceRecord]:
        """Records for one code on one day (default today), sorted by time."""
        target = self._format_date(day) if day else to_taipei(self._clock.now()).strftime(DATE_FORMAT)
        records = self._repo.list_by_code(code, date=target)
        self._mirror[code] = list(records)
        return records

    def history_between(
        self,
        code: str,
        start: DateLike,
        end: DateLike,
    ) -> list[HistoryPriceRecord]:
        """Records for one code across an inclusive date range."""
        return self._repo.list_by_code(
            code,
            start_date=self._format_date(start),
            end_date=self._format_date(end),
        )

    def cached_history(self, code: str) -> list[HistoryPriceRecord]:
        """Records currently held in memory for a code."""
        return list(self._mirror.get(code, []))

    def latest_price(self, code: str) -> Optional[float]:
        """Most recent stored price for a code, if any."""
        record = self._repo.latest_for_code(code)
        return record.price if record else None

    def clear(self) -> None:
        self._repo.clear()
        self._mirror.clear()

    def _to_record(self, snapshot: QuoteSnapshot) -> HistoryPriceRecord:
        if snapshot.timestamp > 0:
            captured = from_epoch_millis(snapshot.timestamp)
        else:
            captured = to_taipei(self._clock.now())
        return HistoryPriceRecord(
            code=snapshot.code,
            date=captured.strftime(DATE_FORMAT),
            time=captured.strftime(TIME_FORMAT),
            price=snapshot.current_price,
            volume=snapshot.total_volume,
        )

    def _default_cutoff(self) -> str:
        cutoff = to_taipei(self._clock.now()) - timedelta(days=self._retention_days)
        return cutoff.strftime(DATE_FORMAT)

    @staticmethod
    def _format_date(value: DateLike) -> str:
        if isinstance(value, datetime):
            return to_taipei(value).strftime(DATE_FORMAT)
        if isinstance(value, date):
            return value.strftime(DATE_FORMAT)
        try:
            return parse_datetime_taipei(value).strftime(DATE_FORMAT)
        except (ValueError, OverflowError):
            raise ValidationError(f"Invalid date: {value!r}")
