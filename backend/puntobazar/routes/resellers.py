# Overview: Flask API routes for resellers; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..services import resellers_service
from ..storage import get_storage
from ..validation import NotFoundError, ValidationError, optional_bool, require_object

resellers_bp = Blueprint("resellers", __name__, url_prefix="/api/revendedores")


@resellers_bp.get("")
def list_resellers_route():
    return jsonify(resellers_service.list_resellers(get_storage()))


@resellers_bp.post("")
def create_reseller_route():
    payload = request.get_json(silent=True) or {}
    try:
        reseller = resellers_service.create_reseller(get_storage(), payload)
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create reseller")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(reseller), 200


@resellers_bp.patch("/<int:reseller_id>/activo")
def toggle_reseller_route(reseller_id: int):
    """Body ``{"activo": bool}`` sets the flag; an empty body flips it."""
    try:
        payload = require_object(request.get_json(silent=True))
        reseller = resellers_service.set_reseller_active(
            get_storage(), reseller_id, optional_bool(payload.get("activo"))
        )
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to update reseller")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(reseller), 200
