# Overview: Per-entity repositories bundled behind one handle, plus the
# transaction boundary the services write through.

from __future__ import annotations

import threading
from contextlib import contextmanager, nullcontext

from flask import Flask, current_app
from sqlalchemy import text

from .extensions import db
from .models import Campania, Cliente, Producto, Revendedor, Usuario, Venta
from .repositories import MemoryRepository, Repository, SqlRepository

EXTENSION_KEY = "puntobazar.storage"

ENTITIES = ("usuarios", "revendedores", "campanias", "productos", "clientes", "ventas")


class Storage:
    backend = "abstract"

    usuarios: Repository
    revendedores: Repository
    campanias: Repository
    productos: Repository
    clientes: Repository
    ventas: Repository

    def transaction(self):
        raise NotImplementedError

    def savepoint(self):
        return nullcontext()

    def ping(self) -> None:
        """Raise if the store is unreachable."""

    def health(self) -> dict:
        self.ping()
        return {
            "backend": self.backend,
            "counts": {name: getattr(self, name).count() for name in ENTITIES},
        }


class MemoryStorage(Storage):
    """
    Everything in process memory. A re-entrant lock serializes writers, so
    read-modify-write sequences (stock decrement, campaign exclusivity)
    cannot interleave.

    The outermost transaction() snapshots every repository and restores
    the snapshot if the block raises, so a failed write leaves no trace,
    the same as a SQL rollback. savepoint() does the same for a sub-step.
    """
    backend = "memory"

    def __init__(self):
        for name in ENTITIES:
            setattr(self, name, MemoryRepository())
        self._lock = threading.RLock()
        self._depth = 0

    def _snapshot(self) -> dict:
        return {name: getattr(self, name).snapshot() for name in ENTITIES}

    def _restore(self, state: dict) -> None:
        for name, repo_state in state.items():
            getattr(self, name).restore(repo_state)

    @contextmanager
    def transaction(self):
        with self._lock:
            state = self._snapshot() if self._depth == 0 else None
            self._depth += 1
            try:
                yield self
            except Exception:
                if state is not None:
                    self._restore(state)
                raise
            finally:
                self._depth -= 1

    @contextmanager
    def savepoint(self):
        with self._lock:
            state = self._snapshot()
            try:
                yield self
            except Exception:
                self._restore(state)
                raise


class SqlStorage(Storage):
    """
    SQLAlchemy storage. transaction() commits on success and rolls back on
    any exception; nested calls join the outer transaction.
    """
    backend = "sql"

    def __init__(self):
        self.usuarios = SqlRepository(Usuario)
        self.revendedores = SqlRepository(Revendedor)
        self.campanias = SqlRepository(Campania)
        self.productos = SqlRepository(Producto)
        self.clientes = SqlRepository(Cliente)
        self.ventas = SqlRepository(Venta)
        self._local = threading.local()

    @contextmanager
    def transaction(self):
        depth = getattr(self._local, "depth", 0)
        self._local.depth = depth + 1
        try:
            yield self
            if depth == 0:
                db.session.commit()
        except Exception:
            if depth == 0:
                db.session.rollback()
            raise
        finally:
            self._local.depth = depth

    def savepoint(self):
        return db.session.begin_nested()

    def ping(self) -> None:
        db.session.execute(text("SELECT 1"))


def build_storage(backend: str) -> Storage:
    if backend == "memory":
        return MemoryStorage()
    if backend == "sql":
        return SqlStorage()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def init_storage(app: Flask) -> Storage:
    storage = build_storage(app.config.get("STORAGE_BACKEND", "sql"))
    app.extensions[EXTENSION_KEY] = storage
    return storage


def get_storage() -> Storage:
    return current_app.extensions[EXTENSION_KEY]
