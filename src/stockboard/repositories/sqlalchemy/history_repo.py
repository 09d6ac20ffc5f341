"""SQLAlchemy implementation of PriceHistoryRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from stockboard.domain.models import HistoryPriceRecord
from stockboard.repositories.sqlalchemy.database import storage_guard
from stockboard.repositories.sqlalchemy.orm_models import PriceHistoryORM


class SqlAlchemyPriceHistoryRepository:
    """SQLAlchemy-backed price history repository."""

    def __init__(self, db: Session):
        self._db = db

    def existing_keys(
        self,
        codes: list[str],
        dates: list[str],
    ) -> set[tuple[str, str, str]]:
        """Return stored (code, date, time) keys for the given codes and dates."""
        if not codes or not dates:
            return set()
        with storage_guard(self._db, "check price history keys"):
            rows = (
                self._db.query(PriceHistoryORM.code, PriceHistoryORM.date, PriceHistoryORM.time)
                .filter(
                    PriceHistoryORM.code.in_(codes),
                    PriceHistoryORM.date.in_(dates),
                )
                .all()
            )
        return {(r.code, r.date, r.time) for r in rows}

    def add_many(self, records: list[HistoryPriceRecord]) -> int:
        """Append records in one transaction."""
        if not records:
            return 0
        with storage_guard(self._db, "save price history"):
            self._db.add_all(
                PriceHistoryORM(
                    code=r.code,
                    date=r.date,
                    time=r.time,
                    price=r.price,
                    volume=r.volume,
                )
                for r in records
            )
            self._db.commit()
        return len(records)

    def list_by_code(
        self,
        code: str,
        date: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[HistoryPriceRecord]:
        """List records for a code, ordered by date then time."""
        with storage_guard(self._db, f"load price history for {code}"):
            query = self._db.query(PriceHistoryORM).filter(PriceHistoryORM.code == code)
            if start_date and end_date:
                query = query.filter(
                    PriceHistoryORM.date >= start_date,
                    PriceHistoryORM.date <= end_date,
                )
            elif date:
                query = query.filter(PriceHistoryORM.date == date)
            rows = query.order_by(PriceHistoryORM.date, PriceHistoryORM.time).all()
        return [self._to_domain(r) for r in rows]

    def latest_for_code(self, code: str) -> Optional[HistoryPriceRecord]:
        """Return the most recent record for a code."""
        with storage_guard(self._db, f"load latest price for {code}"):
            row = (
                self._db.query(PriceHistoryORM)
                .filter(PriceHistoryORM.code == code)
                .order_by(PriceHistoryORM.date.desc(), PriceHistoryORM.time.desc())
                .first()
            )
        return self._to_domain(row) if row else None

    def delete_before(self, cutoff_date: str) -> int:
        """Delete all records dated before cutoff_date."""
        with storage_guard(self._db, "prune price history"):
            deleted = (
                self._db.query(PriceHistoryORM)
                .filter(PriceHistoryORM.date < cutoff_date)
                .delete(synchronize_session=False)
            )
            self._db.commit()
        return deleted

    def clear(self) -> None:
        """Delete all records."""
        with storage_guard(self._db, "clear price history"):
            self._db.query(PriceHistoryORM).delete()
            self._db.commit()

    def count(self) -> int:
        """Return the number of stored records."""
        with storage_guard(self._db, "count price history"):
            return self._db.query(func.count(PriceHistoryORM.id)).scalar() or 0

    @staticmethod
    def _to_domain(orm: PriceHistoryORM) -> HistoryPriceRecord:
        """Convert ORM model to domain model."""
        return HistoryPriceRecord(
            id=orm.id,
            code=orm.code,
            date=orm.date,
            time=orm.time,
            price=float(orm.price),
            volume=int(orm.volume or 0),
        )
