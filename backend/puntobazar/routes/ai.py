# Overview: Flask API routes forwarding text generation requests.

from flask import Blueprint, current_app, jsonify, request

from ..services import ai_service

ai_bp = Blueprint("ai", __name__, url_prefix="/api/ia")


def _generator() -> ai_service.TextGenerator:
    return current_app.extensions[ai_service.EXTENSION_KEY]


@ai_bp.post("/descripcion-producto")
def describe_product_route():
    """Always 200; ``ok: false`` tells the front end to use its local text."""
    return jsonify(ai_service.describe_product(_generator(), request.get_json(silent=True)))


@ai_bp.post("/campania")
def draft_campaign_route():
    return jsonify(ai_service.draft_campaign(_generator(), request.get_json(silent=True)))
