"""Portfolio service: positions and totals from the ledger plus current quotes."""

import logging

from stockboard.core.clock import Clock
from stockboard.core.exceptions import SourceUnavailable
from stockboard.domain.views import PortfolioSummary, StockPosition
from stockboard.services.ledger_service import LedgerService
from stockboard.services.pnl_engine import PnlEngine
from stockboard.services.quote_cache import QuoteCacheService

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Pull-based derivation of positions.

    Every call replays the full ledger through the PnL engine; nothing
    derived is stored. When the quote source is down the last-known cached
    quotes are used and the summary carries quote_error.
    """

    def __init__(
        self,
        ledger: LedgerService,
        quote_cache: QuoteCacheService,
        engine: PnlEngine,
        clock: Clock,
    ):
        self._ledger = ledger
        self._quote_cache = quote_cache
        self._engine = engine
        self._clock = clock

    async def get_positions(self) -> list[StockPosition]:
        summary = await self.get_summary()
        return summary.positions

    async def get_summary(self) -> PortfolioSummary:
        trades = self._ledger.list_trades()
        tickers = list(dict.fromkeys(t.ticker for t in trades))

        quote_error = None
        try:
            snapshots = await self._quote_cache.get_or_fetch(tickers)
        except SourceUnavailable as exc:
            logger.warning("Quotes unavailable, using cached values: %s", exc.message)
            quote_error = exc.message
            snapshots = self._quote_cache.get_cached(tickers)

        quotes = {s.code: s for s in snapshots}
        positions = self._engine.compute_positions(trades, quotes)
        return PortfolioSummary(
            positions=positions,
            total=self._engine.compute_total_pnl(positions),
            as_of=self._clock.now(),
            quote_error=quote_error,
        )
