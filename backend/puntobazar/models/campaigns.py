from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class Campania(db.Model):
    """
    Marketing message shown on the public catalogue.

    At most one row has activa=True; campaigns_service enforces it.
    """
    __tablename__ = "campanias"
    __table_args__ = (
        db.Index("ix_campanias_activa_creada", "activa", "creada_en"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    titulo = db.Column(db.String(255), nullable=False, default="")
    texto = db.Column(db.Text, nullable=False, default="")
    activa = db.Column(db.Boolean, nullable=False, default=False)
    creada_en = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "titulo": self.titulo,
            "texto": self.texto,
            "activa": self.activa,
            "creada_en": to_utc_z(self.creada_en),
        }
