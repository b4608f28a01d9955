from __future__ import annotations

import copy
import threading
from datetime import datetime
from typing import Any

from ..time_utils import to_utc_z
from .base import Repository


class MemoryRepository(Repository):
    """
    Process-local collection. Lost on restart.

    Rows are kept in insertion order (which is id order) and copied on the
    way in and out, so callers never hold a live reference to stored state.
    """

    def __init__(self):
        self._rows: dict[int, dict] = {}
        self._last_id = 0
        self._lock = threading.RLock()

    @staticmethod
    def _export(row: dict) -> dict:
        out = copy.deepcopy(row)
        for key, value in out.items():
            if isinstance(value, datetime):
                out[key] = to_utc_z(value)
        return out

    def list(self) -> list[dict]:
        with self._lock:
            return [self._export(r) for r in self._rows.values()]

    def get(self, record_id: int, *, for_update: bool = False) -> dict | None:
        with self._lock:
            row = self._rows.get(record_id)
            return self._export(row) if row is not None else None

    def add(self, record: dict[str, Any]) -> dict:
        with self._lock:
            self._last_id += 1
            row = {"id": self._last_id}
            row.update(copy.deepcopy({k: v for k, v in record.items() if k != "id"}))
            self._rows[row["id"]] = row
            return self._export(row)

    def update(self, record_id: int, changes: dict[str, Any]) -> dict | None:
        with self._lock:
            row = self._rows.get(record_id)
            if row is None:
                return None
            row.update(copy.deepcopy({k: v for k, v in changes.items() if k != "id"}))
            return self._export(row)

    def update_all(self, changes: dict[str, Any], *, exclude_id: int | None = None) -> int:
        with self._lock:
            count = 0
            for row_id, row in self._rows.items():
                if row_id == exclude_id:
                    continue
                row.update(copy.deepcopy(changes))
                count += 1
            return count

    def delete(self, record_id: int) -> dict | None:
        with self._lock:
            row = self._rows.pop(record_id, None)
            return self._export(row) if row is not None else None

    def count(self) -> int:
        with self._lock:
            return len(self._rows)

    def snapshot(self) -> tuple[dict[int, dict], int]:
        with self._lock:
            return copy.deepcopy(self._rows), self._last_id

    def restore(self, state: tuple[dict[int, dict], int]) -> None:
        rows, last_id = state
        with self._lock:
            self._rows = copy.deepcopy(rows)
            self._last_id = last_id
