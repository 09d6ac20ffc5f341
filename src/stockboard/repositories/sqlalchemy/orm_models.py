"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Integer,
    Float,
    UniqueConstraint,
    Index,
    Enum as SqlEnum,
)

from stockboard.repositories.sqlalchemy.database import Base
from stockboard.domain.models.enums import TradeDirection


class WatchlistItemORM(Base):
    """SQLAlchemy model for WatchlistItem."""

    __tablename__ = "watchlist"

    code = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    position_index = Column(Integer, nullable=False, index=True)


class TradeORM(Base):
    """SQLAlchemy model for TradeRecord (ledger entry)."""

    __tablename__ = "trades"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticker = Column(String(20), nullable=False, index=True)
    traded_at = Column(DateTime, nullable=False, index=True)
    direction = Column(SqlEnum(TradeDirection), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    fee = Column(Float, nullable=False, default=0.0)
    tax = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)


class PriceHistoryORM(Base):
    """SQLAlchemy model for HistoryPriceRecord."""

    __tablename__ = "price_history"
    __table_args__ = (
        UniqueConstraint("code", "date", "time", name="uq_price_history_key"),
        Index("ix_price_history_date", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, index=True)
    date = Column(String(10), nullable=False)
    time = Column(String(8), nullable=False)
    price = Column(Float, nullable=False)
    volume = Column(Integer, nullable=False, default=0)
