# Overview: Flask API routes for sales; parses input and returns JSON responses.

# backend/puntobazar/routes/sales.py
"""Sales API routes. Sales are append-only: no update or delete."""

from flask import Blueprint, current_app, jsonify, request

from ..services import sales_service
from ..storage import get_storage
from ..validation import ValidationError

sales_bp = Blueprint("sales", __name__, url_prefix="/api/ventas")


@sales_bp.get("")
def list_sales_route():
    return jsonify(sales_service.list_sales(get_storage()))


@sales_bp.post("")
def create_sale_route():
    """
    Record a sale.

    Body: ``items`` [{producto_id, cantidad}] or legacy ``producto_id`` +
    ``cantidad_producto``; optional ``total`` (a positive total is used
    as-is), ``comision_porcentaje``, ``cliente_id`` or ``cliente_texto``,
    ``revendedor_id``/``revendedor_nombre``, ``fecha``, ``detalle``.
    """
    try:
        sale = sales_service.create_sale(get_storage(), request.get_json(silent=True))
        return jsonify(sale), 200

    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create sale")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
