# backend/puntobazar/services/products_service.py
"""
Catalogue, stock and promotional pricing.

PROMOTION FIELDS: oferta_tipo / oferta_valor / oferta_etiqueta always move
together. A promotion with no type or a non-positive value is stored in the
cleared state ("", None, "") rather than as a degenerate active promotion.

PARTIAL UPDATES: only keys present in the request are written. A stock
change never touches the promotion and a promotion change never touches
stock.
"""
from __future__ import annotations

from typing import Any

from ..storage import Storage
from ..time_utils import utcnow
from ..validation import (
    PRODUCT_POLICY,
    NotFoundError,
    optional_int,
    to_number,
    to_text,
    validate_payload,
)

PROMO_PERCENTAGE = "porcentaje"
PROMO_FIXED_PRICE = "precio_fijo"

PROMO_TYPE_ALIASES = {
    "percentage": PROMO_PERCENTAGE,
    "percent": PROMO_PERCENTAGE,
    "fixed-price": PROMO_FIXED_PRICE,
    "fixed_price": PROMO_FIXED_PRICE,
    "precio-fijo": PROMO_FIXED_PRICE,
}

PROMO_FIELDS = ("oferta_tipo", "oferta_valor", "oferta_etiqueta")

CLEARED_PROMOTION = {"oferta_tipo": "", "oferta_valor": None, "oferta_etiqueta": ""}

DEFAULT_STOCK_ON_CREATE = 1

NOT_FOUND_MESSAGE = "Producto no encontrado."


def normalize_promotion(tipo: Any, valor: Any, etiqueta: Any) -> dict:
    tipo = to_text(tipo).lower()
    tipo = PROMO_TYPE_ALIASES.get(tipo, tipo)
    valor = to_number(valor)
    if not tipo or valor <= 0:
        return dict(CLEARED_PROMOTION)
    return {"oferta_tipo": tipo, "oferta_valor": valor, "oferta_etiqueta": to_text(etiqueta)}


def has_promotion(product: dict) -> bool:
    return bool(product.get("oferta_tipo")) and to_number(product.get("oferta_valor")) > 0


def effective_price(product: dict) -> int | float:
    """
    Base price after the current promotion:
    - porcentaje: price * (1 - value/100)
    - precio_fijo: value replaces the price
    Never negative; any other (or no) promotion leaves the price unchanged.
    """
    precio = to_number(product.get("precio"))
    valor = to_number(product.get("oferta_valor"))
    tipo = product.get("oferta_tipo")
    if valor <= 0:
        return precio
    if tipo == PROMO_PERCENTAGE:
        return to_number(round(max(0, precio * (1 - valor / 100)), 2))
    if tipo == PROMO_FIXED_PRICE:
        return to_number(max(0, valor))
    return precio


def present(product: dict) -> dict:
    """Add the derived pricing fields clients display."""
    out = dict(product)
    out["oferta_activa"] = has_promotion(product)
    out["precio_final"] = effective_price(product)
    return out


def _require(storage: Storage, product_id: int, for_update: bool = False) -> dict:
    product = storage.productos.get(product_id, for_update=for_update)
    if product is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return product


def list_products(storage: Storage) -> list[dict]:
    return [present(p) for p in storage.productos.list()]


def list_active_products(storage: Storage) -> list[dict]:
    """Catalogue view: active and (untracked stock or stock > 0)."""
    return [
        present(p) for p in storage.productos.list()
        if p["activo"] and (p.get("stock") is None or p["stock"] > 0)
    ]


def list_promoted_products(storage: Storage) -> list[dict]:
    return [present(p) for p in storage.productos.list() if has_promotion(p)]


def get_product(storage: Storage, product_id: int) -> dict:
    return present(_require(storage, product_id))


def create_product(storage: Storage, payload: dict) -> dict:
    patch = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=False)

    stock = patch.get("stock")
    now = utcnow()
    record = {
        "nombre": patch["nombre"],
        "descripcion": patch.get("descripcion", ""),
        "precio": patch["precio"],
        "categoria": patch.get("categoria", ""),
        "imagen_url": patch.get("imagen_url", ""),
        "colores": patch.get("colores", []),
        "tamanos": patch.get("tamanos", []),
        "stock": DEFAULT_STOCK_ON_CREATE if stock is None else stock,
        "activo": True,
        **normalize_promotion(
            patch.get("oferta_tipo"), patch.get("oferta_valor"), patch.get("oferta_etiqueta")
        ),
        "creado_en": now,
        "actualizado_en": now,
    }
    with storage.transaction():
        return present(storage.productos.add(record))


def update_product(storage: Storage, product_id: int, payload: dict) -> dict:
    patch = validate_payload(payload=payload, policy=PRODUCT_POLICY, partial=True)

    changes = {k: v for k, v in patch.items() if k not in PROMO_FIELDS}
    if "stock" in changes and changes["stock"] is None:
        changes["stock"] = 0

    with storage.transaction():
        current = _require(storage, product_id, for_update=True)
        if any(k in patch for k in PROMO_FIELDS):
            merged = {k: patch.get(k, current.get(k)) for k in PROMO_FIELDS}
            changes.update(normalize_promotion(
                merged["oferta_tipo"], merged["oferta_valor"], merged["oferta_etiqueta"]
            ))
        changes["actualizado_en"] = utcnow()
        return present(storage.productos.update(product_id, changes))


def set_product_active(storage: Storage, product_id: int, activo: bool | None) -> dict:
    """Set the flag when a boolean is given, otherwise flip it."""
    with storage.transaction():
        current = _require(storage, product_id, for_update=True)
        value = (not current["activo"]) if activo is None else activo
        return present(storage.productos.update(
            product_id, {"activo": value, "actualizado_en": utcnow()}
        ))


def set_stock(storage: Storage, product_id: int, value: Any) -> dict:
    """Absolute stock set. Promotion fields are left alone."""
    stock = optional_int(value) or 0
    with storage.transaction():
        _require(storage, product_id, for_update=True)
        return present(storage.productos.update(
            product_id, {"stock": stock, "actualizado_en": utcnow()}
        ))


def set_promotion(storage: Storage, product_id: int, tipo: Any, valor: Any, etiqueta: Any) -> dict:
    """Set or clear the promotion triple. Stock is left alone."""
    promo = normalize_promotion(tipo, valor, etiqueta)
    with storage.transaction():
        _require(storage, product_id, for_update=True)
        return present(storage.productos.update(
            product_id, {**promo, "actualizado_en": utcnow()}
        ))


def delete_product(storage: Storage, product_id: int) -> dict:
    """
    Hard delete. Past sales keep their product ids (no referential
    integrity is enforced).
    """
    with storage.transaction():
        deleted = storage.productos.delete(product_id)
    if deleted is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return present(deleted)
