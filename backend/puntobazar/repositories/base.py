from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Repository(ABC):
    """
    One collection of flat records keyed by an integer ``id``.

    Records cross this boundary as plain dicts. Ids are assigned by the
    repository (never by the caller), start at 1 and are never reused.
    """

    @abstractmethod
    def list(self) -> list[dict]:
        """All records, ordered by id ascending."""

    @abstractmethod
    def get(self, record_id: int, *, for_update: bool = False) -> dict | None:
        """One record, or None when the id is unknown."""

    @abstractmethod
    def add(self, record: dict[str, Any]) -> dict:
        """Store a new record and return it with its assigned id."""

    @abstractmethod
    def update(self, record_id: int, changes: dict[str, Any]) -> dict | None:
        """Apply only the given keys; None when the id is unknown."""

    @abstractmethod
    def update_all(self, changes: dict[str, Any], *, exclude_id: int | None = None) -> int:
        """Apply the same change to every record (but one) in a single step."""

    @abstractmethod
    def delete(self, record_id: int) -> dict | None:
        """Remove and return the record; None when the id is unknown."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored records."""

    def find(self, **filters: Any) -> list[dict]:
        return [
            r for r in self.list()
            if all(r.get(k) == v for k, v in filters.items())
        ]
