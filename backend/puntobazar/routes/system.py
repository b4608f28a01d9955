# backend/puntobazar/routes/system.py
"""
Health endpoint and the two front-end pages (catalogue and admin).
"""

import time

from flask import Blueprint, current_app, jsonify, send_from_directory

from ..storage import get_storage

system_bp = Blueprint("system", __name__)


@system_bp.get("/api/health")
def health_route():
    start_time = time.time()
    try:
        details = get_storage().health()
    except Exception:
        current_app.logger.exception("Storage health check failed")
        return jsonify({
            "status": "unhealthy",
            "latency_ms": round((time.time() - start_time) * 1000, 2),
            "error": "Storage error",
        }), 503
    return jsonify({
        "status": "healthy",
        "latency_ms": round((time.time() - start_time) * 1000, 2),
        "storage": details,
        "ai_configured": bool(current_app.config.get("OPENAI_API_KEY")),
    })


@system_bp.get("/")
def catalogue_page():
    return send_from_directory(current_app.config["PUBLIC_FOLDER"], "catalogo.html")


@system_bp.get("/admin")
def admin_page():
    return send_from_directory(current_app.config["PUBLIC_FOLDER"], "admin.html")
