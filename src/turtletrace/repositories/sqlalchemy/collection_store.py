"""SQLAlchemy implementation of CollectionStore."""

from typing import Optional

from sqlalchemy.orm import Session

from turtletrace.repositories.sqlalchemy.orm_models import CollectionORM


class SqlAlchemyCollectionStore:
    """SQLAlchemy-backed collection store (one row per collection key)."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, key: str) -> Optional[str]:
        """Return the stored blob for ``key``."""
        row = self._db.get(CollectionORM, key)
        return row.payload if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the blob stored under ``key``."""
        row = self._db.get(CollectionORM, key)
        if row is None:
            self._db.add(CollectionORM(key=key, payload=value))
        else:
            row.payload = value
        self._db.commit()

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._db.query(CollectionORM).filter(CollectionORM.key == key).delete()
        self._db.commit()

    def keys(self) -> list[str]:
        rows = self._db.query(CollectionORM.key).order_by(CollectionORM.key).all()
        return [r[0] for r in rows]
