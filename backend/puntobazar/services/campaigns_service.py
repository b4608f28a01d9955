"""
Campaigns: marketing messages for the public catalogue.

EXCLUSIVITY: at most one campaign is active. Creating an active campaign or
activating one by id deactivates every other campaign inside the same
storage transaction, so the winner is always the last write.
"""
from __future__ import annotations

from ..storage import Storage
from ..time_utils import utcnow
from ..validation import CAMPAIGN_POLICY, NotFoundError, validate_payload


def list_campaigns(storage: Storage) -> list[dict]:
    return storage.campanias.list()


def create_campaign(storage: Storage, payload: dict) -> dict:
    patch = validate_payload(payload=payload, policy=CAMPAIGN_POLICY, partial=False)
    activa = patch.get("activa", False)
    with storage.transaction():
        if activa:
            storage.campanias.update_all({"activa": False})
        return storage.campanias.add({
            "titulo": patch.get("titulo", ""),
            "texto": patch.get("texto", ""),
            "activa": activa,
            "creada_en": utcnow(),
        })


def activate_campaign(storage: Storage, campaign_id: int) -> dict:
    with storage.transaction():
        if storage.campanias.get(campaign_id, for_update=True) is None:
            raise NotFoundError("Campaña no encontrada.")
        storage.campanias.update_all({"activa": False}, exclude_id=campaign_id)
        return storage.campanias.update(campaign_id, {"activa": True})


def delete_campaign(storage: Storage, campaign_id: int) -> dict:
    with storage.transaction():
        deleted = storage.campanias.delete(campaign_id)
    if deleted is None:
        raise NotFoundError("Campaña no encontrada.")
    return deleted


def todays_campaign(storage: Storage) -> dict | None:
    """Most recently created active campaign, or None."""
    active = [c for c in storage.campanias.list() if c["activa"]]
    if not active:
        return None
    active.sort(key=lambda c: (c["creada_en"] or "", c["id"]), reverse=True)
    return active[0]
