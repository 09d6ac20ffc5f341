"""Periodic quote update loop for the watchlist."""

import asyncio
import logging
from enum import Enum
from typing import Optional

from stockboard.core.clock import Clock
from stockboard.core.exceptions import SourceUnavailable, StorageError
from stockboard.core.timer import PeriodicTimer, Timer, TimerFactory
from stockboard.domain.views import QuoteSnapshot
from stockboard.services import market_calendar
from stockboard.services.history_service import PriceHistoryService
from stockboard.services.quote_cache import QuoteCacheService
from stockboard.services.stock_store import StockStore
from stockboard.services.watchlist_service import WatchlistService

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"


class QuoteUpdateScheduler:
    """
    Drives watchlist refreshes on a fixed interval.

    One instance per application context. Only one refresh runs at a time;
    a trigger that arrives while a refresh is in flight is skipped. Price
    history writes are spawned as background tasks and never fail a refresh.
    """

    def __init__(
        self,
        watchlist: WatchlistService,
        quote_cache: QuoteCacheService,
        store: StockStore,
        history: PriceHistoryService,
        clock: Clock,
        interval_seconds: float,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self._watchlist = watchlist
        self._quote_cache = quote_cache
        self._store = store
        self._history = history
        self._clock = clock
        self._interval = interval_seconds
        self._timer_factory: TimerFactory = timer_factory or PeriodicTimer
        self._timer: Optional[Timer] = None
        self._state = SchedulerState.IDLE
        self._is_updating = False
        self._background: set[asyncio.Task] = set()

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SchedulerState.RUNNING

    @property
    def is_updating(self) -> bool:
        return self._is_updating

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def start(self) -> None:
        """Arm the timer and run one refresh immediately. No-op if already running."""
        if self._state == SchedulerState.RUNNING:
            logger.info("Quote scheduler already running")
            return

        self._state = SchedulerState.RUNNING
        self._timer = self._timer_factory(self._interval, self.refresh)
        self._timer.arm()
        logger.info("Quote scheduler started (interval %ss)", self._interval)
        await self.refresh()

    def stop(self) -> None:
        """Cancel future refreshes. An in-flight refresh is left to finish."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._state == SchedulerState.RUNNING:
            logger.info("Quote scheduler stopped")
        self._state = SchedulerState.IDLE

    async def force_refresh(self) -> list[QuoteSnapshot]:
        """Refresh now, bypassing cache freshness. Skipped if a refresh is running."""
        if self._is_updating:
            logger.info("Refresh already in progress, skipping forced refresh")
            return []
        self._quote_cache.invalidate(self._watchlist.codes())
        return await self.refresh()

    async def refresh(self) -> list[QuoteSnapshot]:
        """
        Run one refresh cycle.

        Returns the snapshots published to the store, or an empty list when
        the cycle was skipped or failed.
        """
        if self._is_updating:
            logger.debug("Refresh already in progress, skipping")
            return []

        codes = self._watchlist.codes()
        if not codes:
            logger.debug("Watchlist empty, nothing to refresh")
            return []

        self._is_updating = True
        self._store.set_updating(True)
        error: Optional[str] = None
        try:
            quotes = await self._quote_cache.get_or_fetch(codes)
        except SourceUnavailable as exc:
            logger.warning("Quote refresh failed: %s", exc.message)
            error = exc.message
            return []
        finally:
            self._is_updating = False
            self._store.set_updating(False, error)

        if quotes:
            self._store.update(quotes)
            self._record_names(quotes)
        else:
            logger.warning("Quote refresh returned no data for %s", ",".join(codes))

        if quotes and market_calendar.is_open(self._clock.now()):
            self._spawn_history_write(quotes)
        return quotes

    def _record_names(self, quotes: list[QuoteSnapshot]) -> None:
        try:
            for quote in quotes:
                self._watchlist.update_name(quote.code, quote.name)
        except StorageError as exc:
            logger.warning("Could not store watchlist names: %s", exc.message)

    async def drain(self) -> None:
        """Wait for pending history writes to finish."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    def _spawn_history_write(self, quotes: list[QuoteSnapshot]) -> None:
        task = asyncio.get_running_loop().create_task(self._write_history(quotes))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _write_history(self, quotes: list[QuoteSnapshot]) -> None:
        try:
            result = await self._history.record(quotes)
            logger.debug(
                "History write: saved=%d skipped=%d", result.saved, result.skipped_duplicates
            )
        except Exception:
            logger.exception("Price history write failed")
