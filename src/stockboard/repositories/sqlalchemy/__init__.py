"""SQLAlchemy repository implementations."""

from stockboard.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
    storage_guard,
)
from stockboard.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository
from stockboard.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from stockboard.repositories.sqlalchemy.history_repo import SqlAlchemyPriceHistoryRepository

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "storage_guard",
    "SqlAlchemyWatchlistRepository",
    "SqlAlchemyTradeRepository",
    "SqlAlchemyPriceHistoryRepository",
]
