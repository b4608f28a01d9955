# Overview: Flask API route for back-office login.

# backend/puntobazar/routes/auth.py
"""
Login against the seeded operator list.

There are no sessions or tokens: a successful login only tells the admin
front end which display name to show.
"""
from flask import Blueprint, current_app, jsonify, request

from ..services import auth_service
from ..storage import get_storage
from ..validation import ValidationError, require_object, to_text

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.post("/login")
def login_route():
    try:
        data = require_object(request.get_json(silent=True))
        username = to_text(data.get("usuario"))
        password = data.get("password")

        if not username or not password:
            return jsonify({"ok": False, "mensaje": "Usuario y clave son obligatorios."}), 400

        user = auth_service.authenticate(get_storage(), username, str(password))
        if not user:
            return jsonify({"ok": False, "mensaje": "Usuario o clave incorrectos."}), 401

        return jsonify({"ok": True, "nombre": auth_service.display_name(user)}), 200

    except ValidationError as e:
        return jsonify({"ok": False, "mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
