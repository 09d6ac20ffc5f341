"""Quote cache with per-ticker freshness and single-flight request coalescing."""

import asyncio
import logging
from functools import partial
from typing import Iterable, Optional

from stockboard.config.settings import QUOTE_FRESHNESS_SECONDS
from stockboard.core.clock import Clock
from stockboard.core.exceptions import MalformedResponse, NotFoundError
from stockboard.domain.views import CacheEntry, QuoteSnapshot
from stockboard.providers.quote_provider import QuoteProvider

logger = logging.getLogger(__name__)

BatchKey = tuple[str, ...]


class QuoteCacheService:
    """
    Wraps the quote provider with a last-known snapshot store.

    Fresh entries are answered from memory. Stale or missing codes are fetched
    in one provider call, and at most one call per distinct code set is in
    flight: concurrent callers asking for the same set await the same task.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        clock: Clock,
        freshness_seconds: float = QUOTE_FRESHNESS_SECONDS,
    ):
        self._provider = provider
        self._clock = clock
        self._freshness = freshness_seconds
        self._entries: dict[str, CacheEntry] = {}
        self._pending: dict[BatchKey, asyncio.Task] = {}
        self._generation = 0

    @property
    def freshness_seconds(self) -> float:
        return self._freshness

    async def get_or_fetch(self, codes: Iterable[str]) -> list[QuoteSnapshot]:
        """
        Return snapshots for codes, fetching only those that are not fresh.

        Results follow the caller's order; codes the source did not answer
        for are left out. SourceUnavailable propagates and leaves existing
        entries in place.
        """
        requested = _normalize(codes)
        if not requested:
            return []

        stale = self._stale_codes(requested)
        if stale:
            await self._fetch_shared(batch_key(stale))
        else:
            logger.debug("Cache hit for %s", ",".join(requested))

        return [self._entries[c].snapshot for c in requested if c in self._entries]

    async def get_one(self, code: str) -> QuoteSnapshot:
        """
        Return the snapshot for a single code.

        Joins an in-flight batch that already covers the code instead of
        issuing its own request. Raises NotFoundError when the source has no
        data for it.
        """
        code = code.strip()
        if not self._stale_codes([code]):
            return self._entries[code].snapshot

        inflight = self._pending_covering(code)
        if inflight is not None:
            logger.debug("Joining in-flight batch for %s", code)
            await asyncio.shield(inflight)
        else:
            await self._fetch_shared((code,))

        entry = self._entries.get(code)
        if entry is None:
            raise NotFoundError("Quote", code)
        return entry.snapshot

    async def force_refresh(self, codes: Iterable[str]) -> list[QuoteSnapshot]:
        """Invalidate codes and fetch them again."""
        requested = _normalize(codes)
        self.invalidate(requested)
        return await self.get_or_fetch(requested)

    def invalidate(self, codes: Iterable[str]) -> None:
        """Mark entries stale; the snapshots stay available through get_cached."""
        for code in codes:
            entry = self._entries.get(code)
            if entry is not None:
                entry.fetched_at = None

    def clear(self) -> None:
        """Drop all entries and pending-request bookkeeping."""
        self._entries.clear()
        self._pending.clear()
        # Fetches still running from before the clear must not repopulate
        self._generation += 1

    def get_cached(self, codes: Optional[Iterable[str]] = None) -> list[QuoteSnapshot]:
        """Last-known snapshots regardless of freshness."""
        if codes is None:
            return [e.snapshot for e in self._entries.values()]
        return [self._entries[c].snapshot for c in _normalize(codes) if c in self._entries]

    def cache_stats(self) -> dict[str, int]:
        now = self._clock.now()
        fresh = sum(1 for e in self._entries.values() if e.is_fresh(now, self._freshness))
        return {
            "cached_quotes": len(self._entries),
            "fresh_quotes": fresh,
            "pending_requests": len(self._pending),
        }

    def _stale_codes(self, codes: list[str]) -> list[str]:
        now = self._clock.now()
        return [
            c for c in codes
            if c not in self._entries or not self._entries[c].is_fresh(now, self._freshness)
        ]

    def _pending_covering(self, code: str) -> Optional[asyncio.Task]:
        for key, task in self._pending.items():
            if code in key:
                return task
        return None

    async def _fetch_shared(self, key: BatchKey) -> list[QuoteSnapshot]:
        task = self._pending.get(key)
        if task is None:
            logger.debug("Fetching quotes for %s", ",".join(key))
            task = asyncio.get_running_loop().create_task(self._fetch(key, self._generation))
            self._pending[key] = task
            task.add_done_callback(partial(self._release, key))
        else:
            logger.debug("Coalescing request for %s", ",".join(key))
        # A cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(task)

    async def _fetch(self, key: BatchKey, generation: int) -> list[QuoteSnapshot]:
        try:
            snapshots = await self._provider.fetch_quotes(list(key))
        except MalformedResponse as exc:
            logger.warning("Malformed quote response for %s: %s", ",".join(key), exc.message)
            return []

        if generation != self._generation:
            logger.debug("Discarding quotes fetched before cache clear")
            return snapshots

        fetched_at = self._clock.now()
        for snapshot in snapshots:
            self._entries[snapshot.code] = CacheEntry(snapshot=snapshot, fetched_at=fetched_at)
        return snapshots

    def _release(self, key: BatchKey, task: asyncio.Task) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Quote fetch for %s failed: %s", ",".join(key), task.exception())


def batch_key(codes: Iterable[str]) -> BatchKey:
    """Canonical key for a code set: sorted and de-duplicated."""
    return tuple(sorted(set(codes)))


def _normalize(codes: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for code in codes:
        code = code.strip()
        if code:
            seen.setdefault(code, None)
    return list(seen)
