from __future__ import annotations

from ..extensions import db


class Revendedor(db.Model):
    __tablename__ = "revendedores"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    telefono = db.Column(db.String(64), nullable=False, default="")
    zona = db.Column(db.String(128), nullable=False, default="")
    activo = db.Column(db.Boolean, nullable=False, default=True)
    acepta_whatsapp = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "telefono": self.telefono,
            "zona": self.zona,
            "activo": self.activo,
            "acepta_whatsapp": self.acepta_whatsapp,
        }
