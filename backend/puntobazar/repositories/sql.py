from __future__ import annotations

from typing import Any

from ..extensions import db
from ..services.concurrency import lock_for_update
from ..validation import MAX_ID
from .base import Repository


class SqlRepository(Repository):
    """
    SQLAlchemy-backed collection.

    The public id is the table's autoincrement primary key, so allocation is
    atomic in the database. Writes are flushed, not committed: the
    surrounding Storage.transaction() owns the commit.
    """

    def __init__(self, model):
        self.model = model
        self._columns = {c.key for c in model.__mapper__.columns} - {"id"}

    def _writable(self, values: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in values.items() if k in self._columns}

    def _load(self, record_id: int, for_update: bool = False):
        if not 0 < record_id <= MAX_ID:
            return None
        query = db.session.query(self.model).filter(self.model.id == record_id)
        if for_update:
            query = lock_for_update(query)
        return query.first()

    def list(self) -> list[dict]:
        rows = db.session.query(self.model).order_by(self.model.id.asc()).all()
        return [r.to_dict() for r in rows]

    def get(self, record_id: int, *, for_update: bool = False) -> dict | None:
        obj = self._load(record_id, for_update=for_update)
        return obj.to_dict() if obj is not None else None

    def add(self, record: dict[str, Any]) -> dict:
        obj = self.model(**self._writable(record))
        db.session.add(obj)
        db.session.flush()
        return obj.to_dict()

    def update(self, record_id: int, changes: dict[str, Any]) -> dict | None:
        obj = self._load(record_id)
        if obj is None:
            return None
        for key, value in self._writable(changes).items():
            setattr(obj, key, value)
        db.session.flush()
        return obj.to_dict()

    def update_all(self, changes: dict[str, Any], *, exclude_id: int | None = None) -> int:
        query = db.session.query(self.model)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return query.update(self._writable(changes), synchronize_session="fetch")

    def delete(self, record_id: int) -> dict | None:
        obj = self._load(record_id)
        if obj is None:
            return None
        data = obj.to_dict()
        db.session.delete(obj)
        db.session.flush()
        return data

    def count(self) -> int:
        return db.session.query(self.model).count()
