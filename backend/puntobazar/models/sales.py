from __future__ import annotations

from ..extensions import db
from ..validation import to_number


class Venta(db.Model):
    """
    Append-only sale record.

    revendedor_nombre and cliente are name snapshots taken when the sale
    was recorded. Ids are not foreign keys: deleting a product or customer
    leaves past sales untouched.
    """
    __tablename__ = "ventas"
    __table_args__ = (
        db.Index("ix_ventas_fecha", "fecha"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    revendedor_id = db.Column(db.Integer, nullable=True, index=True)
    revendedor_nombre = db.Column(db.String(255), nullable=False, default="")

    fecha = db.Column(db.String(10), nullable=False)
    total = db.Column(db.Float, nullable=False, default=0)
    comision_porcentaje = db.Column(db.Float, nullable=False, default=0)
    comision_calculada = db.Column(db.Integer, nullable=False, default=0)

    cliente_id = db.Column(db.Integer, nullable=True, index=True)
    cliente = db.Column(db.String(255), nullable=False, default="")
    detalle = db.Column(db.Text, nullable=False, default="")

    # [{"producto_id": int, "cantidad": int}, ...]
    items = db.Column(db.JSON, nullable=False, default=list)

    # Single-product shape kept for older clients
    producto_id = db.Column(db.Integer, nullable=True)
    cantidad_producto = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "revendedor_id": self.revendedor_id,
            "revendedor_nombre": self.revendedor_nombre,
            "fecha": self.fecha,
            "total": to_number(self.total),
            "comision_porcentaje": to_number(self.comision_porcentaje),
            "comision_calculada": self.comision_calculada,
            "cliente_id": self.cliente_id,
            "cliente": self.cliente,
            "detalle": self.detalle,
            "items": [dict(i) for i in (self.items or [])],
            "producto_id": self.producto_id,
            "cantidad_producto": self.cantidad_producto,
        }
