# backend/puntobazar/config.py
from __future__ import annotations
import os


def _parse_users(raw: str) -> list[dict]:
    """Parse ``usuario:password:Nombre`` entries separated by commas."""
    users = []
    for chunk in raw.split(","):
        parts = [p.strip() for p in chunk.split(":")]
        if len(parts) < 2 or not parts[0]:
            continue
        users.append({
            "usuario": parts[0],
            "password": parts[1],
            "nombre": parts[2] if len(parts) > 2 else "",
        })
    return users


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/puntobazar.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///puntobazar.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "sql" (SQLAlchemy) or "memory" (process-local, lost on restart)
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "sql")
    AUTO_CREATE_TABLES = os.environ.get("AUTO_CREATE_TABLES", "true").lower() == "true"

    ADMIN_USERS = _parse_users(
        os.environ.get("ADMIN_USERS", "ricardo:1234:Ricardo,eliseo:1234:Eliseo")
    )

    # Text generation (Responses API). Without a key the AI endpoints answer ok=false.
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
    OPENAI_API_URL = os.environ.get("OPENAI_API_URL", "https://api.openai.com/v1/responses")
    OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-5.1-mini")
    AI_TIMEOUT_SECONDS = float(os.environ.get("AI_TIMEOUT_SECONDS", "20"))

    PUBLIC_FOLDER = os.environ.get(
        "PUBLIC_FOLDER",
        os.path.join(os.path.dirname(os.path.dirname(__file__)), "public"),
    )
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", os.path.join(PUBLIC_FOLDER, "uploads"))
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

    CORS_ORIGINS = {
        o.strip()
        for o in os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if o.strip()
    }

    # Cost factor for seeded operator passwords
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    STORAGE_BACKEND = "sql"
    AUTO_CREATE_TABLES = True
    OPENAI_API_KEY = ""
    BCRYPT_ROUNDS = 4
    ADMIN_USERS = [
        {"usuario": "ricardo", "password": "1234", "nombre": "Ricardo"},
        {"usuario": "eliseo", "password": "1234", "nombre": "Eliseo"},
    ]
