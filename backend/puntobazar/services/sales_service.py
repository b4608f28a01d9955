"""
Sales Service - append-only sale records with stock decrement

FLOW (one storage transaction):
1. Resolve the customer (snapshot by id, or create one from free text)
2. Total: explicit positive total wins, else sum of effective prices
3. Append the sale
4. Decrement stock per line item, floored at 0, best effort per item

Stock is NOT checked before decrementing: overselling floors stock at 0.
A failure decrementing one item is logged and the sale still stands.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..storage import Storage
from ..time_utils import today_iso
from ..validation import optional_id, require_object, to_int, to_number, to_text
from .concurrency import run_with_retry
from .customers_service import SALE_CREATED_NOTE, add_customer
from .products_service import effective_price

logger = logging.getLogger(__name__)


def list_sales(storage: Storage) -> list[dict]:
    return storage.ventas.list()


def compute_commission(total: int | float, percentage: int | float) -> int:
    """round(total * percentage / 100), halves rounded away from zero."""
    raw = Decimal(str(total)) * Decimal(str(percentage)) / Decimal(100)
    return int(raw.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_line_items(payload: dict) -> list[dict]:
    """
    Normalize both request shapes to [{"producto_id", "cantidad"}].

    Current shape: "items": [{"producto_id": 3, "cantidad": 2}, ...]
    Legacy shape:  "producto_id": 3, "cantidad_producto": 2
    Items without a usable product id or with a non-positive quantity are
    dropped.
    """
    raw_items = payload.get("items")
    if isinstance(raw_items, list) and raw_items:
        candidates = [
            (item.get("producto_id"), item.get("cantidad"))
            for item in raw_items
            if isinstance(item, dict)
        ]
    else:
        candidates = [(payload.get("producto_id"), payload.get("cantidad_producto"))]

    items = []
    for product_id, quantity in candidates:
        pid = optional_id(product_id)
        qty = to_int(quantity)
        if pid is not None and qty > 0:
            items.append({"producto_id": pid, "cantidad": qty})
    return items


def compute_total(storage: Storage, items: list[dict]) -> int | float:
    """Sum of effective_price * quantity. Unknown products contribute 0."""
    total: int | float = 0
    for item in items:
        product = storage.productos.get(item["producto_id"])
        if product is None:
            continue
        total += effective_price(product) * item["cantidad"]
    return to_number(round(total, 2))


def _resolve_customer(storage: Storage, cliente_id: Any, cliente_texto: Any) -> tuple[int | None, str]:
    cid = optional_id(cliente_id)
    name = to_text(cliente_texto)
    if cid is None and name:
        created = add_customer(storage, nombre=name, notas=SALE_CREATED_NOTE)
        return created["id"], name
    if cid is not None:
        customer = storage.clientes.get(cid)
        if customer is not None:
            name = customer["nombre"]
    return cid, name


def _resolve_reseller(storage: Storage, revendedor_id: Any, revendedor_nombre: Any) -> tuple[int | None, str]:
    rid = optional_id(revendedor_id)
    name = to_text(revendedor_nombre)
    if rid is not None:
        reseller = storage.revendedores.get(rid)
        if reseller is not None:
            name = reseller["nombre"]
    return rid, name


def _decrement_stock(storage: Storage, items: list[dict]) -> None:
    for item in items:
        try:
            with storage.savepoint():
                product = storage.productos.get(item["producto_id"], for_update=True)
                if product is None:
                    continue
                current = product.get("stock")
                current = current if isinstance(current, (int, float)) else 0
                storage.productos.update(
                    item["producto_id"],
                    {"stock": max(0, int(current) - item["cantidad"])},
                )
        except Exception:
            logger.exception(
                "Failed to decrement stock for product %s (qty %s)",
                item["producto_id"], item["cantidad"],
            )


def create_sale(storage: Storage, payload: dict) -> dict:
    payload = require_object(payload)

    items = parse_line_items(payload)
    explicit_total = to_number(payload.get("total"))
    porcentaje = to_number(payload.get("comision_porcentaje"))
    legacy_product_id = optional_id(payload.get("producto_id"))
    legacy_quantity = to_int(payload.get("cantidad_producto")) if legacy_product_id else 0

    def _op():
        with storage.transaction():
            cliente_id, cliente = _resolve_customer(
                storage, payload.get("cliente_id"), payload.get("cliente_texto")
            )
            revendedor_id, revendedor_nombre = _resolve_reseller(
                storage, payload.get("revendedor_id"), payload.get("revendedor_nombre")
            )
            total = explicit_total if explicit_total > 0 else compute_total(storage, items)

            sale = storage.ventas.add({
                "revendedor_id": revendedor_id,
                "revendedor_nombre": revendedor_nombre,
                "fecha": to_text(payload.get("fecha")) or today_iso(),
                "total": total,
                "comision_porcentaje": porcentaje,
                "comision_calculada": compute_commission(total, porcentaje),
                "cliente_id": cliente_id,
                "cliente": cliente,
                "detalle": to_text(payload.get("detalle")),
                "items": items,
                "producto_id": legacy_product_id,
                "cantidad_producto": max(legacy_quantity, 0),
            })

            _decrement_stock(storage, items)
            return sale

    sale = run_with_retry(_op)
    logger.info("Recorded sale %s total=%s items=%d", sale["id"], sale["total"], len(items))
    return sale
