"""SQLAlchemy implementation of TradeRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from stockboard.core.timezone import to_taipei
from stockboard.domain.models import TradeRecord
from stockboard.repositories.sqlalchemy.database import storage_guard
from stockboard.repositories.sqlalchemy.orm_models import TradeORM


def _to_naive_taipei(dt: Optional[datetime]) -> Optional[datetime]:
    """SQLite stores naive datetimes; store them as Taipei wall time."""
    if dt is None:
        return None
    return to_taipei(dt).replace(tzinfo=None)


def _from_naive_taipei(dt: Optional[datetime]) -> Optional[datetime]:
    return to_taipei(dt) if dt is not None else None


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed trade ledger repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, trade: TradeRecord) -> TradeRecord:
        """Persist a new trade."""
        with storage_guard(self._db, f"record trade for {trade.ticker}"):
            orm_trade = self._to_orm(trade)
            self._db.add(orm_trade)
            self._db.commit()
            self._db.refresh(orm_trade)
        return self._to_domain(orm_trade)

    def get_by_id(self, trade_id: int) -> Optional[TradeRecord]:
        """Retrieve trade by ID."""
        with storage_guard(self._db, f"load trade {trade_id}"):
            orm_trade = self._db.get(TradeORM, trade_id)
        return self._to_domain(orm_trade) if orm_trade else None

    def delete(self, trade_id: int) -> None:
        """Delete a trade."""
        with storage_guard(self._db, f"delete trade {trade_id}"):
            self._db.query(TradeORM).filter(TradeORM.id == trade_id).delete()
            self._db.commit()

    def list_all(self) -> list[TradeRecord]:
        """List all trades ordered by traded_at."""
        return self.query()

    def list_by_ticker(self, ticker: str) -> list[TradeRecord]:
        """List trades for one ticker ordered by traded_at."""
        return self.query(tickers=[ticker])

    def query(
        self,
        tickers: Optional[list[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[TradeRecord]:
        """Query trades with filters."""
        with storage_guard(self._db, "query trades"):
            query = self._db.query(TradeORM)

            conditions = []
            if tickers:
                conditions.append(TradeORM.ticker.in_(tickers))
            if start_date:
                conditions.append(TradeORM.traded_at >= _to_naive_taipei(start_date))
            if end_date:
                conditions.append(TradeORM.traded_at <= _to_naive_taipei(end_date))

            if conditions:
                query = query.filter(and_(*conditions))

            query = query.order_by(TradeORM.traded_at, TradeORM.id)
            rows = query.all()
        return [self._to_domain(t) for t in rows]

    @staticmethod
    def _to_orm(trade: TradeRecord) -> TradeORM:
        """Convert domain model to ORM model."""
        return TradeORM(
            id=trade.id,
            ticker=trade.ticker,
            traded_at=_to_naive_taipei(trade.traded_at),
            direction=trade.direction,
            price=trade.price,
            quantity=trade.quantity,
            fee=trade.fee,
            tax=trade.tax,
            created_at=_to_naive_taipei(trade.created_at),
            updated_at=_to_naive_taipei(trade.updated_at),
        )

    @staticmethod
    def _to_domain(orm: TradeORM) -> TradeRecord:
        """Convert ORM model to domain model."""
        return TradeRecord(
            id=orm.id,
            ticker=orm.ticker,
            traded_at=_from_naive_taipei(orm.traded_at),
            direction=orm.direction,
            price=float(orm.price),
            quantity=int(orm.quantity),
            fee=float(orm.fee or 0),
            tax=float(orm.tax or 0),
            created_at=_from_naive_taipei(orm.created_at),
            updated_at=_from_naive_taipei(orm.updated_at),
        )
