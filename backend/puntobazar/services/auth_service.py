# Overview: Back-office login against the seeded operator list.

from __future__ import annotations

import logging

import bcrypt

from ..storage import Storage

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds))
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Timing-safe comparison; a malformed hash is a mismatch."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def seed_users(storage: Storage, users: list[dict], rounds: int = DEFAULT_BCRYPT_ROUNDS) -> int:
    """
    Create configured operators that do not exist yet. Idempotent.

    Returns the number of users created.
    """
    created = 0
    with storage.transaction():
        existing = {u["usuario"] for u in storage.usuarios.list()}
        for entry in users:
            username = entry.get("usuario")
            if not username or username in existing:
                continue
            storage.usuarios.add({
                "usuario": username,
                "password_hash": hash_password(entry.get("password", ""), rounds),
                "nombre": entry.get("nombre") or "",
            })
            existing.add(username)
            created += 1
    if created:
        logger.info("Seeded %d back-office user(s)", created)
    return created


def authenticate(storage: Storage, username: str, password: str) -> dict | None:
    """Return the matching user record, or None on any mismatch."""
    for user in storage.usuarios.find(usuario=username):
        if verify_password(password, user["password_hash"]):
            return user
    return None


def display_name(user: dict) -> str:
    return user.get("nombre") or user["usuario"]
