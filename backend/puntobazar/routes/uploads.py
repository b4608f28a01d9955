# Overview: Image upload endpoint and the route serving stored uploads.

from flask import Blueprint, current_app, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from ..services import uploads_service
from ..validation import ValidationError

uploads_bp = Blueprint("uploads", __name__)


@uploads_bp.post("/api/upload-imagen")
def upload_image_route():
    """Multipart field ``imagen`` -> ``{ok: true, url}``."""
    try:
        url = uploads_service.save_image(
            request.files.get("imagen"), current_app.config["UPLOAD_FOLDER"]
        )
    except HTTPException:
        raise
    except ValidationError as e:
        return jsonify({"ok": False, "mensaje": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to store uploaded image")
        return jsonify({"ok": False, "mensaje": "Error al subir la imagen."}), 500
    return jsonify({"ok": True, "url": url}), 200


@uploads_bp.get("/uploads/<path:filename>")
def uploaded_file_route(filename: str):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)
