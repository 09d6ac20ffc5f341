"""SQLAlchemy implementation of WatchlistRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from stockboard.domain.models import WatchlistItem
from stockboard.repositories.sqlalchemy.database import storage_guard
from stockboard.repositories.sqlalchemy.orm_models import WatchlistItemORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def list_ordered(self) -> list[WatchlistItem]:
        """List all items ordered by index."""
        with storage_guard(self._db, "load watchlist"):
            rows = (
                self._db.query(WatchlistItemORM)
                .order_by(WatchlistItemORM.position_index)
                .all()
            )
        return [self._to_domain(r) for r in rows]

    def get(self, code: str) -> Optional[WatchlistItem]:
        """Retrieve an item by code."""
        with storage_guard(self._db, f"load watchlist item {code}"):
            row = self._db.get(WatchlistItemORM, code)
        return self._to_domain(row) if row else None

    def add(self, item: WatchlistItem) -> WatchlistItem:
        """Persist a new item."""
        with storage_guard(self._db, f"add {item.code} to watchlist"):
            row = WatchlistItemORM(
                code=item.code,
                name=item.name,
                position_index=item.index,
            )
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        return self._to_domain(row)

    def delete_and_renumber(self, code: str) -> list[WatchlistItem]:
        """Delete an item and renumber the remaining ones from zero."""
        with storage_guard(self._db, f"remove {code} from watchlist"):
            self._db.query(WatchlistItemORM).filter(
                WatchlistItemORM.code == code
            ).delete()
            rows = (
                self._db.query(WatchlistItemORM)
                .order_by(WatchlistItemORM.position_index)
                .all()
            )
            for index, row in enumerate(rows):
                row.position_index = index
            self._db.commit()
        return [self._to_domain(r) for r in rows]

    def replace_all(self, items: list[WatchlistItem]) -> list[WatchlistItem]:
        """Rewrite indices (and names) of existing items in one transaction."""
        with storage_guard(self._db, "reorder watchlist"):
            for item in items:
                row = self._db.get(WatchlistItemORM, item.code)
                if row is None:
                    row = WatchlistItemORM(code=item.code)
                    self._db.add(row)
                row.name = item.name
                row.position_index = item.index
            self._db.commit()
        return self.list_ordered()

    @staticmethod
    def _to_domain(orm: WatchlistItemORM) -> WatchlistItem:
        """Convert ORM model to domain model."""
        return WatchlistItem(
            code=orm.code,
            name=orm.name or "",
            index=orm.position_index,
        )
