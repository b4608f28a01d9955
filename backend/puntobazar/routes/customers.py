# Overview: Flask API routes for customers.

from flask import Blueprint, current_app, jsonify, request

from ..services import customers_service
from ..storage import get_storage
from ..validation import ValidationError

customers_bp = Blueprint("customers", __name__, url_prefix="/api/clientes")


@customers_bp.get("")
def list_customers_route():
    return jsonify(customers_service.list_customers(get_storage()))


@customers_bp.post("")
def create_customer_route():
    payload = request.get_json(silent=True) or {}
    try:
        customer = customers_service.create_customer(get_storage(), payload)
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create customer")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(customer), 200
