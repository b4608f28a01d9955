from __future__ import annotations

from ..storage import Storage
from ..validation import RESELLER_POLICY, NotFoundError, validate_payload


def list_resellers(storage: Storage) -> list[dict]:
    return storage.revendedores.list()


def create_reseller(storage: Storage, payload: dict) -> dict:
    patch = validate_payload(payload=payload, policy=RESELLER_POLICY, partial=False)
    record = {
        "nombre": patch["nombre"],
        "telefono": patch.get("telefono", ""),
        "zona": patch.get("zona", ""),
        "activo": True,
        "acepta_whatsapp": patch.get("acepta_whatsapp", False),
    }
    with storage.transaction():
        return storage.revendedores.add(record)


def set_reseller_active(storage: Storage, reseller_id: int, activo: bool | None) -> dict:
    """Set the flag when a boolean is given, otherwise flip it."""
    with storage.transaction():
        current = storage.revendedores.get(reseller_id, for_update=True)
        if current is None:
            raise NotFoundError("Revendedor no encontrado.")
        value = (not current["activo"]) if activo is None else activo
        return storage.revendedores.update(reseller_id, {"activo": value})
