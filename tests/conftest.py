"""
Pytest configuration and fixtures for stockboard tests.

This module provides:
- In-memory SQLite database fixtures
- A controllable clock and a manually fired timer
- Fake quote providers (counting, gated and failing)
- Service and repository fixtures
- A TestClient over an isolated AppContext
"""

import asyncio
from datetime import datetime, timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from stockboard.app_context import AppContext
from stockboard.config.settings import Settings
from stockboard.core.exceptions import SourceUnavailable
from stockboard.core.timer import TimerCallback
from stockboard.core.timezone import TAIPEI_TZ
from stockboard.domain.views import QuoteSnapshot
from stockboard.main import create_app
from stockboard.repositories.sqlalchemy import (
    SqlAlchemyPriceHistoryRepository,
    SqlAlchemyTradeRepository,
    SqlAlchemyWatchlistRepository,
)
from stockboard.repositories.sqlalchemy.database import (
    Base,
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


# =============================================================================
# TIME HELPERS
# =============================================================================


def taipei_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in Asia/Taipei."""
    return TAIPEI_TZ.localize(datetime(year, month, day, hour, minute, second))


def epoch_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


class FakeClock:
    """Clock whose time only moves when a test moves it."""

    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, seconds: float) -> None:
        self._now = self._now + timedelta(seconds=seconds)


class ManualTimer:
    """Timer that records arm/cancel calls and fires only when told to."""

    def __init__(self, interval_seconds: float, callback: TimerCallback):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.armed = False
        self.arm_count = 0
        self.cancel_count = 0

    def arm(self) -> None:
        self.armed = True
        self.arm_count += 1

    def cancel(self) -> None:
        self.armed = False
        self.cancel_count += 1

    async def fire(self) -> None:
        await self.callback()


class ManualTimerFactory:
    """TimerFactory that keeps every timer it builds."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, interval_seconds: float, callback: TimerCallback) -> ManualTimer:
        timer = ManualTimer(interval_seconds, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.armed]


async def settle(rounds: int = 5) -> None:
    """Let pending tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


# =============================================================================
# QUOTE FIXTURES
# =============================================================================

FIXED_PRICES = {
    "2330": (520.0, 515.0, "台積電"),
    "2317": (105.5, 104.0, "鴻海"),
    "0050": (150.0, 151.2, "元大台灣50"),
}


def make_snapshot(
    code: str,
    price: float = 100.0,
    yesterday: float = 99.0,
    name: Optional[str] = None,
    timestamp: Optional[int] = None,
    total_volume: int = 1000,
) -> QuoteSnapshot:
    """Build a QuoteSnapshot with sensible defaults."""
    return QuoteSnapshot(
        code=code,
        name=name or code,
        current_price=price,
        yesterday_price=yesterday,
        open_price=yesterday,
        high_price=max(price, yesterday),
        low_price=min(price, yesterday),
        volume=10,
        total_volume=total_volume,
        trading_date="20240115",
        trading_time="10:00:00",
        timestamp=timestamp if timestamp is not None else epoch_millis(taipei_datetime(2024, 1, 15)),
    )


class FakeQuoteProvider:
    """
    Deterministic quote provider for testing.

    Counts calls, can be told to fail, and can hold a fetch in flight until
    the test releases it.
    """

    def __init__(self, prices: Optional[dict] = None, clock: Optional[FakeClock] = None):
        self.prices = dict(FIXED_PRICES if prices is None else prices)
        self.clock = clock
        self.calls: list[list[str]] = []
        self.error: Optional[Exception] = None
        self.closed = False
        self._gate: Optional[asyncio.Event] = None

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def hold(self) -> None:
        """Block subsequent fetches until release() is called."""
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()
            self._gate = None

    async def fetch_quotes(self, codes: list[str]) -> list[QuoteSnapshot]:
        self.calls.append(list(codes))
        if self._gate is not None:
            await self._gate.wait()
        if self.error is not None:
            raise self.error
        timestamp = epoch_millis(self.clock.now()) if self.clock else None
        result = []
        for code in codes:
            if code in self.prices:
                price, yesterday, name = self.prices[code]
                result.append(make_snapshot(code, price, yesterday, name, timestamp=timestamp))
        return result

    async def aclose(self) -> None:
        self.closed = True


class FailingQuoteProvider:
    """Quote provider that always reports the source as unavailable."""

    def __init__(self):
        self.calls: list[list[str]] = []

    async def fetch_quotes(self, codes: list[str]) -> list[QuoteSnapshot]:
        self.calls.append(list(codes))
        raise SourceUnavailable("Quote source responded with 503", status=503)

    async def aclose(self) -> None:
        pass


@pytest.fixture
def fixed_now() -> datetime:
    """Monday 2024-01-15 10:00 Taipei, inside trading hours."""
    return taipei_datetime(2024, 1, 15, 10, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def timer_factory() -> ManualTimerFactory:
    return ManualTimerFactory()


@pytest.fixture
def fake_provider(clock) -> FakeQuoteProvider:
    return FakeQuoteProvider(clock=clock)


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    return FailingQuoteProvider()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine):
    """Create test database session."""
    session = create_session_factory(test_engine)()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def watchlist_repo(test_session) -> SqlAlchemyWatchlistRepository:
    return SqlAlchemyWatchlistRepository(test_session)


@pytest.fixture
def trade_repo(test_session) -> SqlAlchemyTradeRepository:
    return SqlAlchemyTradeRepository(test_session)


@pytest.fixture
def history_repo(test_session) -> SqlAlchemyPriceHistoryRepository:
    return SqlAlchemyPriceHistoryRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def watchlist_service(watchlist_repo) -> WatchlistService:
    service = WatchlistService(watchlist_repo)
    service.initialize()
    return service


@pytest.fixture
def ledger_service(trade_repo, clock) -> LedgerService:
    return LedgerService(trade_repo, clock)


@pytest.fixture
def history_service(history_repo, clock) -> PriceHistoryService:
    return PriceHistoryService(history_repo, clock, retention_days=3)


@pytest.fixture
def quote_cache(fake_provider, clock) -> QuoteCacheService:
    return QuoteCacheService(fake_provider, clock, freshness_seconds=5)


@pytest.fixture
def stock_store(clock) -> StockStore:
    return StockStore(clock)


@pytest.fixture
def pnl_engine() -> PnlEngine:
    return PnlEngine()


@pytest.fixture
def portfolio_service(ledger_service, quote_cache, pnl_engine, clock) -> PortfolioService:
    return PortfolioService(ledger_service, quote_cache, pnl_engine, clock)


@pytest.fixture
def scheduler(
    watchlist_service,
    quote_cache,
    stock_store,
    history_service,
    clock,
    timer_factory,
) -> QuoteUpdateScheduler:
    return QuoteUpdateScheduler(
        watchlist=watchlist_service,
        quote_cache=quote_cache,
        store=stock_store,
        history=history_service,
        clock=clock,
        interval_seconds=5,
        timer_factory=timer_factory,
    )


# =============================================================================
# API FIXTURES
# =============================================================================


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        database_url="sqlite://",
        auto_refresh=False,
        log_level="WARNING",
    )


@pytest.fixture
def app_context(test_settings, test_engine, fake_provider, clock, timer_factory) -> AppContext:
    return AppContext(
        settings=test_settings,
        engine=test_engine,
        provider=fake_provider,
        clock=clock,
        timer_factory=timer_factory,
    )


@pytest.fixture
def client(app_context) -> TestClient:
    """FastAPI TestClient; the lifespan initializes and closes the context."""
    app = create_app(app_context)
    with TestClient(app) as test_client:
        yield test_client
