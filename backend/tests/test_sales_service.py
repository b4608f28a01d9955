"""
Sale recording tests: totals from effective prices, stock decrement,
customer resolution and commission, against both storage backends.
"""

import logging

import pytest

from conftest import make_product
from puntobazar.services import customers_service, products_service, resellers_service, sales_service
from puntobazar.services.sales_service import compute_commission, parse_line_items
from puntobazar.time_utils import today_iso
from puntobazar.validation import ValidationError


def _stock(storage, product_id):
    return storage.productos.get(product_id)["stock"]


# =============================================================================
# TOTALS AND STOCK
# =============================================================================


class TestSaleTotals:

    def test_two_items_with_promotion(self, storage):
        a = make_product(storage, nombre="A", precio=100, stock=10)
        b = make_product(storage, nombre="B", precio=200, stock=10)
        products_service.set_promotion(storage, b["id"], "porcentaje", 50, "Mitad")

        sale = sales_service.create_sale(storage, {
            "items": [
                {"producto_id": a["id"], "cantidad": 2},
                {"producto_id": b["id"], "cantidad": 1},
            ],
        })

        assert sale["total"] == 300
        assert _stock(storage, a["id"]) == 8
        assert _stock(storage, b["id"]) == 9

    def test_unknown_product_contributes_zero(self, storage):
        a = make_product(storage, precio=100, stock=5)

        sale = sales_service.create_sale(storage, {
            "items": [
                {"producto_id": a["id"], "cantidad": 1},
                {"producto_id": 999, "cantidad": 3},
            ],
        })

        assert sale["total"] == 100
        assert _stock(storage, a["id"]) == 4

    def test_explicit_positive_total_wins(self, storage):
        a = make_product(storage, precio=100, stock=5)
        sale = sales_service.create_sale(storage, {
            "total": "450",
            "items": [{"producto_id": a["id"], "cantidad": 2}],
        })
        assert sale["total"] == 450
        assert _stock(storage, a["id"]) == 3

    def test_zero_total_is_recomputed(self, storage):
        a = make_product(storage, precio=80, stock=5)
        sale = sales_service.create_sale(storage, {
            "total": 0,
            "items": [{"producto_id": a["id"], "cantidad": 2}],
        })
        assert sale["total"] == 160

    def test_fixed_price_promotion_in_total(self, storage):
        a = make_product(storage, precio=1000, stock=5)
        products_service.set_promotion(storage, a["id"], "precio_fijo", 300, "")
        sale = sales_service.create_sale(storage, {"items": [{"producto_id": a["id"], "cantidad": 3}]})
        assert sale["total"] == 900

    def test_product_id_too_large_for_storage_contributes_zero(self, storage):
        a = make_product(storage, precio=100, stock=5)
        sale = sales_service.create_sale(storage, {
            "items": [
                {"producto_id": a["id"], "cantidad": 1},
                {"producto_id": 10**30, "cantidad": 1},
            ],
        })
        assert sale["total"] == 100
        assert sale["items"] == [{"producto_id": a["id"], "cantidad": 1}]
        assert _stock(storage, a["id"]) == 4

    def test_stock_clamped_at_zero(self, storage):
        a = make_product(storage, precio=10, stock=2)
        sales_service.create_sale(storage, {"items": [{"producto_id": a["id"], "cantidad": 50}]})
        assert _stock(storage, a["id"]) == 0

    def test_invalid_quantities_are_skipped(self, storage):
        a = make_product(storage, precio=10, stock=5)
        sale = sales_service.create_sale(storage, {
            "items": [
                {"producto_id": a["id"], "cantidad": 0},
                {"producto_id": a["id"], "cantidad": -2},
                {"producto_id": a["id"], "cantidad": "x"},
            ],
        })
        assert sale["total"] == 0
        assert sale["items"] == []
        assert _stock(storage, a["id"]) == 5

    def test_legacy_single_product_shape(self, storage):
        a = make_product(storage, precio=25, stock=5)
        sale = sales_service.create_sale(storage, {
            "producto_id": str(a["id"]),
            "cantidad_producto": "2",
        })
        assert sale["producto_id"] == a["id"]
        assert sale["cantidad_producto"] == 2
        assert sale["items"] == [{"producto_id": a["id"], "cantidad": 2}]
        assert sale["total"] == 50
        assert _stock(storage, a["id"]) == 3

    def test_stock_failure_is_logged_and_sale_kept(self, storage, monkeypatch, caplog):
        a = make_product(storage, nombre="A", precio=100, stock=10)
        b = make_product(storage, nombre="B", precio=50, stock=10)

        real_update = storage.productos.update

        def flaky_update(record_id, changes):
            if record_id == a["id"] and "stock" in changes:
                raise RuntimeError("disk full")
            return real_update(record_id, changes)

        monkeypatch.setattr(storage.productos, "update", flaky_update)

        with caplog.at_level(logging.ERROR, logger="puntobazar.services.sales_service"):
            sale = sales_service.create_sale(storage, {
                "items": [
                    {"producto_id": a["id"], "cantidad": 1},
                    {"producto_id": b["id"], "cantidad": 4},
                ],
            })

        assert sale["total"] == 300
        assert _stock(storage, a["id"]) == 10
        assert _stock(storage, b["id"]) == 6
        assert [s["id"] for s in sales_service.list_sales(storage)] == [sale["id"]]
        assert "Failed to decrement stock" in caplog.text


# =============================================================================
# CUSTOMER / RESELLER / COMMISSION
# =============================================================================


class TestSaleParties:

    def test_free_text_customer_is_created(self, storage):
        sale = sales_service.create_sale(storage, {"total": 100, "cliente_texto": "Marta"})

        customers = customers_service.list_customers(storage)
        assert len(customers) == 1
        assert customers[0]["nombre"] == "Marta"
        assert customers[0]["notas"] == "Creado desde venta"
        assert sale["cliente_id"] == customers[0]["id"]
        assert sale["cliente"] == "Marta"

    def test_customer_id_snapshots_current_name(self, storage):
        c = customers_service.create_customer(storage, {"nombre": "Lucía"})
        sale = sales_service.create_sale(storage, {"total": 10, "cliente_id": c["id"], "cliente_texto": "otro"})
        assert sale["cliente_id"] == c["id"]
        assert sale["cliente"] == "Lucía"
        assert len(customers_service.list_customers(storage)) == 1

    def test_no_customer(self, storage):
        sale = sales_service.create_sale(storage, {"total": 10})
        assert sale["cliente_id"] is None
        assert sale["cliente"] == ""

    def test_reseller_name_snapshot(self, storage):
        r = resellers_service.create_reseller(storage, {"nombre": "Ana"})
        sale = sales_service.create_sale(storage, {"total": 10, "revendedor_id": r["id"]})
        assert sale["revendedor_id"] == r["id"]
        assert sale["revendedor_nombre"] == "Ana"

    def test_unknown_reseller_keeps_given_name(self, storage):
        sale = sales_service.create_sale(storage, {
            "total": 10, "revendedor_id": 77, "revendedor_nombre": "Pedro",
        })
        assert sale["revendedor_id"] == 77
        assert sale["revendedor_nombre"] == "Pedro"

    def test_commission_and_defaults(self, storage):
        sale = sales_service.create_sale(storage, {"total": 1000, "comision_porcentaje": "15"})
        assert sale["comision_porcentaje"] == 15
        assert sale["comision_calculada"] == 150
        assert sale["fecha"] == today_iso()
        assert sale["detalle"] == ""

    def test_explicit_date_kept(self, storage):
        sale = sales_service.create_sale(storage, {"total": 1, "fecha": "2025-12-24"})
        assert sale["fecha"] == "2025-12-24"


class TestSaleAtomicity:

    def test_failed_insert_keeps_no_customer_or_stock_change(self, storage, monkeypatch):
        a = make_product(storage, precio=100, stock=5)

        def broken_add(record):
            raise RuntimeError("write failed")

        monkeypatch.setattr(storage.ventas, "add", broken_add)

        with pytest.raises(RuntimeError):
            sales_service.create_sale(storage, {
                "cliente_texto": "Marta",
                "items": [{"producto_id": a["id"], "cantidad": 2}],
            })

        assert customers_service.list_customers(storage) == []
        assert _stock(storage, a["id"]) == 5
        assert sales_service.list_sales(storage) == []

    def test_non_object_body_is_rejected(self, storage):
        with pytest.raises(ValidationError):
            sales_service.create_sale(storage, [{"producto_id": 1, "cantidad": 1}])
        assert sales_service.list_sales(storage) == []


class TestCommissionRounding:

    @pytest.mark.parametrize(
        "total,percentage,expected",
        [
            (1000, 15, 150),
            (333, 10, 33),
            (105, 10, 11),
            (125, 2, 3),
            (300, 0, 0),
            (99.99, 10, 10),
            (0, 20, 0),
        ],
    )
    def test_round_half_up(self, total, percentage, expected):
        assert compute_commission(total, percentage) == expected


class TestParseLineItems:

    def test_items_win_over_legacy_fields(self):
        items = parse_line_items({
            "items": [{"producto_id": 2, "cantidad": 1}],
            "producto_id": 5,
            "cantidad_producto": 9,
        })
        assert items == [{"producto_id": 2, "cantidad": 1}]

    def test_empty_items_fall_back_to_legacy(self):
        assert parse_line_items({"items": [], "producto_id": 5, "cantidad_producto": 1}) == [
            {"producto_id": 5, "cantidad": 1}
        ]

    def test_nothing(self):
        assert parse_line_items({}) == []
