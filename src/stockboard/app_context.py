"""Application context: explicit wiring of repositories, services and the update loop.

One instance is built per application (or per test) and passed to whoever
needs it; there is no module-level singleton.
"""

import logging
from typing import Optional

from sqlalchemy import Engine

from stockboard.config.settings import Settings
from stockboard.core.clock import Clock, SystemClock
from stockboard.core.timer import TimerFactory
from stockboard.providers import QuoteProvider, TwseQuoteProvider
from stockboard.repositories.sqlalchemy import (
    SqlAlchemyPriceHistoryRepository,
    SqlAlchemyTradeRepository,
    SqlAlchemyWatchlistRepository,
)
from stockboard.repositories.sqlalchemy.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from stockboard.services import (
    LedgerService,
    PnlEngine,
    PortfolioService,
    PriceHistoryService,
    QuoteCacheService,
    QuoteUpdateScheduler,
    StockStore,
    WatchlistService,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context holding every shared component.

    Args:
        settings: Configuration; read from the environment when omitted.
        engine: Database engine; built from settings when omitted.
        provider: Quote source; the TWSE client when omitted.
        clock: Source of "now"; the system clock when omitted.
        timer_factory: Builds the scheduler's repeating timer.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine: Optional[Engine] = None,
        provider: Optional[QuoteProvider] = None,
        clock: Optional[Clock] = None,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.settings = settings or Settings()
        self.clock = clock or SystemClock()
        self._initialized = False

        self._owns_engine = engine is None
        self._engine = engine or create_db_engine(self.settings.get_database_url())
        self._session = create_session_factory(self._engine)()

        # Repositories
        self.watchlist_repo = SqlAlchemyWatchlistRepository(self._session)
        self.trade_repo = SqlAlchemyTradeRepository(self._session)
        self.history_repo = SqlAlchemyPriceHistoryRepository(self._session)

        # Services
        self.history = PriceHistoryService(
            repo=self.history_repo,
            clock=self.clock,
            retention_days=self.settings.history_retention_days,
        )
        self.provider: QuoteProvider = provider or TwseQuoteProvider(
            base_url=self.settings.quote_source_url,
            exchange_prefix=self.settings.quote_exchange_prefix,
            timeout_seconds=self.settings.quote_request_timeout_seconds,
            fallback=self.history,
            clock=self.clock,
        )
        self.quote_cache = QuoteCacheService(
            provider=self.provider,
            clock=self.clock,
            freshness_seconds=self.settings.quote_freshness_seconds,
        )
        self.store = StockStore(self.clock)
        self.watchlist = WatchlistService(self.watchlist_repo)
        self.ledger = LedgerService(self.trade_repo, self.clock)
        self.pnl_engine = PnlEngine(
            include_buy_fee_in_cost=self.settings.include_buy_fee_in_avg_cost,
        )
        self.portfolio = PortfolioService(
            ledger=self.ledger,
            quote_cache=self.quote_cache,
            engine=self.pnl_engine,
            clock=self.clock,
        )
        self.scheduler = QuoteUpdateScheduler(
            watchlist=self.watchlist,
            quote_cache=self.quote_cache,
            store=self.store,
            history=self.history,
            clock=self.clock,
            interval_seconds=self.settings.update_interval_seconds,
            timer_factory=timer_factory,
        )

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def engine(self) -> Engine:
        return self._engine

    def initialize(self) -> None:
        """Create tables and load the watchlist."""
        init_db(self._engine)
        self.watchlist.initialize()
        self._initialized = True
        logger.info("Application context initialized")

    async def aclose(self) -> None:
        """Stop the update loop and release the HTTP client and database session."""
        self.scheduler.stop()
        await self.scheduler.drain()
        await self.provider.aclose()
        self._session.close()
        if self._owns_engine:
            self._engine.dispose()
        self._initialized = False
