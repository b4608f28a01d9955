from __future__ import annotations

from ..extensions import db


class Usuario(db.Model):
    """
    Back-office operator.

    Seeded from configuration at startup; there is no API to create,
    modify or remove users.
    """
    __tablename__ = "usuarios"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    usuario = db.Column(db.String(64), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    nombre = db.Column(db.String(128), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Usuario id={self.id} usuario={self.usuario!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "usuario": self.usuario,
            "password_hash": self.password_hash,
            "nombre": self.nombre,
        }
