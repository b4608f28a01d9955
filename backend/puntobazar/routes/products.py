# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/puntobazar/routes/products.py
"""
Catalogue, stock and promotion routes.

PATCH /<id>          partial edit; only fields present in the body change
PATCH /<id>/stock    absolute stock set; promotion untouched
PATCH /<id>/oferta   set or clear the promotion; stock untouched
PATCH /<id>/activo   set ``activo`` or flip it when the body has no boolean
"""
from flask import Blueprint, current_app, jsonify, request

from ..services import products_service
from ..storage import get_storage
from ..validation import NotFoundError, ValidationError, optional_bool, require_object

products_bp = Blueprint("products", __name__, url_prefix="/api/productos")


def _first_present(payload: dict, *keys: str):
    for key in keys:
        if key in payload:
            return payload[key]
    return None


@products_bp.get("")
def list_products_route():
    return jsonify(products_service.list_products(get_storage()))


@products_bp.get("/activos")
def list_active_products_route():
    """Active products with stock (or untracked stock), for the public catalogue."""
    return jsonify(products_service.list_active_products(get_storage()))


@products_bp.get("/ofertas")
def list_promoted_products_route():
    return jsonify(products_service.list_promoted_products(get_storage()))


@products_bp.get("/<int:product_id>")
def get_product_route(product_id: int):
    try:
        return jsonify(products_service.get_product(get_storage(), product_id))
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True) or {}
    try:
        created = products_service.create_product(get_storage(), payload)
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create product")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(created), 200


@products_bp.patch("/<int:product_id>")
def update_product_route(product_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        updated = products_service.update_product(get_storage(), product_id, payload)
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update product")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(updated), 200


@products_bp.patch("/<int:product_id>/activo")
def toggle_product_route(product_id: int):
    try:
        payload = require_object(request.get_json(silent=True))
        updated = products_service.set_product_active(
            get_storage(), product_id, optional_bool(payload.get("activo"))
        )
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to toggle product")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(updated), 200


@products_bp.patch("/<int:product_id>/stock")
def set_stock_route(product_id: int):
    try:
        payload = require_object(request.get_json(silent=True))
        updated = products_service.set_stock(get_storage(), product_id, payload.get("stock"))
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to set product stock")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(updated), 200


@products_bp.patch("/<int:product_id>/oferta")
def set_promotion_route(product_id: int):
    """
    Body: ``oferta_tipo`` ("porcentaje" | "precio_fijo"), ``oferta_valor``,
    ``oferta_etiqueta`` (short keys ``tipo``/``valor``/``etiqueta`` also
    accepted). No type or a value <= 0 clears the promotion.
    """
    try:
        payload = require_object(request.get_json(silent=True))
        updated = products_service.set_promotion(
            get_storage(),
            product_id,
            _first_present(payload, "oferta_tipo", "tipo"),
            _first_present(payload, "oferta_valor", "valor"),
            _first_present(payload, "oferta_etiqueta", "etiqueta"),
        )
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to set product promotion")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(updated), 200


@products_bp.delete("/<int:product_id>")
def delete_product_route(product_id: int):
    try:
        deleted = products_service.delete_product(get_storage(), product_id)
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete product")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(deleted), 200
