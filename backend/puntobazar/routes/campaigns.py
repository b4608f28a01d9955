# Overview: Flask API routes for marketing campaigns.

# backend/puntobazar/routes/campaigns.py
"""
Campaign routes.

Only one campaign is active at a time: POST with ``activa: true`` and
PATCH /<id>/activa both deactivate every other campaign.
"""
from flask import Blueprint, current_app, jsonify, request

from ..services import campaigns_service
from ..storage import get_storage
from ..validation import NotFoundError, ValidationError

campaigns_bp = Blueprint("campaigns", __name__, url_prefix="/api/campanias")


@campaigns_bp.get("")
def list_campaigns_route():
    return jsonify(campaigns_service.list_campaigns(get_storage()))


@campaigns_bp.get("/hoy")
def todays_campaign_route():
    """Latest active campaign for the catalogue front page, or null."""
    return jsonify(campaigns_service.todays_campaign(get_storage()))


@campaigns_bp.post("")
def create_campaign_route():
    payload = request.get_json(silent=True) or {}
    try:
        campaign = campaigns_service.create_campaign(get_storage(), payload)
    except ValidationError as e:
        return jsonify({"mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create campaign")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(campaign), 200


@campaigns_bp.patch("/<int:campaign_id>/activa")
def activate_campaign_route(campaign_id: int):
    try:
        campaign = campaigns_service.activate_campaign(get_storage(), campaign_id)
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to activate campaign")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(campaign), 200


@campaigns_bp.delete("/<int:campaign_id>")
def delete_campaign_route(campaign_id: int):
    try:
        deleted = campaigns_service.delete_campaign(get_storage(), campaign_id)
    except NotFoundError as e:
        return jsonify({"mensaje": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to delete campaign")
        return jsonify({"mensaje": "Error interno del servidor."}), 500
    return jsonify(deleted), 200
