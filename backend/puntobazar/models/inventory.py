from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z
from ..validation import to_number


class Producto(db.Model):
    """
    Catalogue item with stock and an optional promotion.

    PROMOTION: (oferta_tipo, oferta_valor, oferta_etiqueta) are set or
    cleared together. oferta_tipo is "porcentaje" or "precio_fijo"; the
    cleared state is ("", None, "").
    """
    __tablename__ = "productos"
    __table_args__ = (
        db.Index("ix_productos_activo", "activo"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    nombre = db.Column(db.String(255), nullable=False)
    descripcion = db.Column(db.Text, nullable=False, default="")
    precio = db.Column(db.Float, nullable=False, default=0)
    categoria = db.Column(db.String(128), nullable=False, default="")
    imagen_url = db.Column(db.String(512), nullable=False, default="")

    colores = db.Column(db.JSON, nullable=False, default=list)
    tamanos = db.Column(db.JSON, nullable=False, default=list)

    stock = db.Column(db.Integer, nullable=True, default=0)
    activo = db.Column(db.Boolean, nullable=False, default=True)

    oferta_tipo = db.Column(db.String(32), nullable=False, default="")
    oferta_valor = db.Column(db.Float, nullable=True)
    oferta_etiqueta = db.Column(db.String(255), nullable=False, default="")

    creado_en = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    actualizado_en = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<Producto id={self.id} nombre={self.nombre!r} stock={self.stock}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.nombre,
            "descripcion": self.descripcion,
            "precio": to_number(self.precio),
            "categoria": self.categoria,
            "imagen_url": self.imagen_url,
            "colores": list(self.colores or []),
            "tamanos": list(self.tamanos or []),
            "stock": self.stock,
            "activo": self.activo,
            "oferta_tipo": self.oferta_tipo,
            "oferta_valor": None if self.oferta_valor is None else to_number(self.oferta_valor),
            "oferta_etiqueta": self.oferta_etiqueta,
            "creado_en": to_utc_z(self.creado_en),
            "actualizado_en": to_utc_z(self.actualizado_en),
        }
