from __future__ import annotations

from ..storage import Storage
from ..validation import CUSTOMER_POLICY, validate_payload

SALE_CREATED_NOTE = "Creado desde venta"


def list_customers(storage: Storage) -> list[dict]:
    return storage.clientes.list()


def create_customer(storage: Storage, payload: dict) -> dict:
    patch = validate_payload(payload=payload, policy=CUSTOMER_POLICY, partial=False)
    with storage.transaction():
        return add_customer(
            storage,
            nombre=patch["nombre"],
            telefono=patch.get("telefono", ""),
            zona=patch.get("zona", ""),
            notas=patch.get("notas", ""),
        )


def add_customer(storage: Storage, *, nombre: str, telefono: str = "", zona: str = "", notas: str = "") -> dict:
    """Insert without validation; callers own the transaction."""
    return storage.clientes.add({
        "nombre": nombre,
        "telefono": telefono,
        "zona": zona,
        "notas": notas,
    })
