from __future__ import annotations

from ..extensions import db


class Cliente(db.Model):
    """
    Customer master data.

    Created explicitly, or on the fly when a sale names a customer that
    has no id yet.
    """
    __tablename__ = "clientes"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    telefono = db.Column(db.String(64), nullable=False, default="")
    zona = db.Column(db.String(128), nullable=False, default="")
    notas = db.Column(db.Text, nullable=False, default="")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "telefono": self.telefono,
            "zona": self.zona,
            "notas": self.notas,
        }
