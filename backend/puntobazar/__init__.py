# backend/puntobazar/__init__.py
import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import db, migrate
from .storage import init_storage

HTTP_ERROR_MESSAGES = {
    404: "Recurso no encontrado.",
    405: "Método no permitido.",
    413: "El archivo es demasiado grande.",
}


def create_app(config_object=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object or Config)

    level = app.config.get("LOG_LEVEL", "INFO")
    app.logger.setLevel(level)
    logging.getLogger(__name__).setLevel(level)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    storage = init_storage(app)

    from .services.ai_service import EXTENSION_KEY, TextGenerator
    app.extensions[EXTENSION_KEY] = TextGenerator.from_config(app.config)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.resellers import resellers_bp
    from .routes.campaigns import campaigns_bp
    from .routes.products import products_bp
    from .routes.customers import customers_bp
    from .routes.sales import sales_bp
    from .routes.ai import ai_bp
    from .routes.uploads import uploads_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(resellers_bp)
    app.register_blueprint(campaigns_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(ai_bp)
    app.register_blueprint(uploads_bp)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        message = HTTP_ERROR_MESSAGES.get(e.code, e.description)
        return jsonify({"mensaje": message}), e.code

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config.get("CORS_ORIGINS", set()):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PATCH,DELETE,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    _bootstrap_storage(app, storage)

    return app


def _bootstrap_storage(app: Flask, storage) -> None:
    from .services.auth_service import seed_users

    if storage.backend == "memory":
        seed_users(storage, app.config.get("ADMIN_USERS", []), app.config["BCRYPT_ROUNDS"])
        return

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()
            seed_users(storage, app.config.get("ADMIN_USERS", []), app.config["BCRYPT_ROUNDS"])
