"""
Catalogue service tests: effective price, promotions, partial updates and
stock, run against both storage backends.
"""

import pytest

from conftest import make_product
from puntobazar.services import products_service
from puntobazar.services.products_service import effective_price, normalize_promotion
from puntobazar.validation import NotFoundError, ValidationError


# =============================================================================
# EFFECTIVE PRICE
# =============================================================================


class TestEffectivePrice:

    def test_percentage_halves_price(self):
        p = {"precio": 1000, "oferta_tipo": "porcentaje", "oferta_valor": 50}
        assert effective_price(p) == 500

    def test_percentage_over_100_floors_at_zero(self):
        p = {"precio": 1000, "oferta_tipo": "porcentaje", "oferta_valor": 150}
        assert effective_price(p) == 0

    def test_fixed_price_replaces_base(self):
        p = {"precio": 1000, "oferta_tipo": "precio_fijo", "oferta_valor": 300}
        assert effective_price(p) == 300

    def test_fixed_price_can_exceed_base(self):
        p = {"precio": 100, "oferta_tipo": "precio_fijo", "oferta_valor": 300}
        assert effective_price(p) == 300

    @pytest.mark.parametrize(
        "tipo,valor",
        [
            ("", 50),
            (None, 50),
            ("porcentaje", 0),
            ("porcentaje", -10),
            ("precio_fijo", 0),
            ("bogo", 20),
        ],
    )
    def test_base_price_when_no_usable_promotion(self, tipo, valor):
        p = {"precio": 1000, "oferta_tipo": tipo, "oferta_valor": valor}
        assert effective_price(p) == 1000

    def test_never_negative(self):
        for valor in (1, 50, 99.5, 100, 101, 10_000):
            p = {"precio": 37.5, "oferta_tipo": "porcentaje", "oferta_valor": valor}
            assert effective_price(p) >= 0

    def test_ten_percent_rounds_to_cents(self):
        p = {"precio": 100, "oferta_tipo": "porcentaje", "oferta_valor": 10}
        assert effective_price(p) == 90


class TestNormalizePromotion:

    def test_missing_type_clears(self):
        assert normalize_promotion("", 10, "x") == {
            "oferta_tipo": "", "oferta_valor": None, "oferta_etiqueta": "",
        }

    def test_non_positive_value_clears(self):
        assert normalize_promotion("porcentaje", "0", "Liquidación")["oferta_tipo"] == ""

    def test_english_type_names_are_accepted(self):
        assert normalize_promotion("percentage", 20, "")["oferta_tipo"] == "porcentaje"
        assert normalize_promotion("fixed-price", 20, "")["oferta_tipo"] == "precio_fijo"

    def test_numeric_string_value(self):
        promo = normalize_promotion("porcentaje", "25", " Hot Sale ")
        assert promo == {"oferta_tipo": "porcentaje", "oferta_valor": 25, "oferta_etiqueta": "Hot Sale"}


# =============================================================================
# CREATE
# =============================================================================


class TestCreateProduct:

    def test_requires_name_and_price(self, storage):
        with pytest.raises(ValidationError):
            products_service.create_product(storage, {"precio": 10})
        with pytest.raises(ValidationError):
            products_service.create_product(storage, {"nombre": "Vaso"})
        with pytest.raises(ValidationError):
            products_service.create_product(storage, {"nombre": "   ", "precio": 10})

    def test_defaults(self, storage):
        p = products_service.create_product(storage, {"nombre": "Vaso", "precio": "250"})
        assert p["id"] == 1
        assert p["precio"] == 250
        assert p["stock"] == 1
        assert p["activo"] is True
        assert p["colores"] == []
        assert p["oferta_tipo"] == ""
        assert p["oferta_valor"] is None
        assert p["oferta_activa"] is False
        assert p["precio_final"] == 250

    def test_blank_stock_defaults_to_one(self, storage):
        p = products_service.create_product(storage, {"nombre": "Vaso", "precio": 1, "stock": ""})
        assert p["stock"] == 1

    def test_non_numeric_stock_becomes_zero(self, storage):
        p = products_service.create_product(storage, {"nombre": "Vaso", "precio": 1, "stock": "muchos"})
        assert p["stock"] == 0

    def test_comma_separated_and_list_colors_match(self, storage):
        a = make_product(storage, colores="rojo, azul, verde")
        b = make_product(storage, colores=["rojo", "azul", "verde"])
        assert a["colores"] == ["rojo", "azul", "verde"]
        assert b["colores"] == a["colores"]

    def test_sizes_drop_blanks(self, storage):
        p = make_product(storage, tamanos=" S, ,M,,L ")
        assert p["tamanos"] == ["S", "M", "L"]

    def test_ids_increase(self, storage):
        ids = [make_product(storage)["id"] for _ in range(3)]
        assert ids == [1, 2, 3]


# =============================================================================
# UPDATE / STOCK / PROMOTION
# =============================================================================


class TestPartialUpdates:

    def test_stock_update_keeps_promotion(self, storage):
        p = make_product(storage, precio=1000)
        products_service.set_promotion(storage, p["id"], "porcentaje", 20, "Hot Sale")

        updated = products_service.set_stock(storage, p["id"], 7)

        assert updated["stock"] == 7
        assert updated["oferta_tipo"] == "porcentaje"
        assert updated["oferta_valor"] == 20
        assert updated["oferta_etiqueta"] == "Hot Sale"
        assert updated["precio_final"] == 800

    def test_promotion_update_keeps_stock(self, storage):
        p = make_product(storage, stock=4)
        updated = products_service.set_promotion(storage, p["id"], "precio_fijo", 50, "")
        assert updated["stock"] == 4

    def test_full_update_without_promo_fields_keeps_promotion(self, storage):
        p = make_product(storage, precio=1000)
        products_service.set_promotion(storage, p["id"], "precio_fijo", 300, "Oferta")

        updated = products_service.update_product(storage, p["id"], {"nombre": "Taza grande", "stock": 3})

        assert updated["nombre"] == "Taza grande"
        assert updated["stock"] == 3
        assert updated["oferta_tipo"] == "precio_fijo"
        assert updated["oferta_valor"] == 300
        assert updated["oferta_etiqueta"] == "Oferta"

    def test_update_touches_only_sent_fields(self, storage):
        p = make_product(storage, descripcion="original", colores="rojo")
        updated = products_service.update_product(storage, p["id"], {"precio": "120"})
        assert updated["precio"] == 120
        assert updated["descripcion"] == "original"
        assert updated["colores"] == ["rojo"]

    def test_update_with_degenerate_promotion_clears_it(self, storage):
        p = make_product(storage)
        products_service.set_promotion(storage, p["id"], "porcentaje", 10, "x")
        updated = products_service.update_product(storage, p["id"], {"oferta_valor": 0})
        assert updated["oferta_tipo"] == ""
        assert updated["oferta_valor"] is None
        assert updated["oferta_etiqueta"] == ""

    def test_update_label_only_keeps_type_and_value(self, storage):
        p = make_product(storage)
        products_service.set_promotion(storage, p["id"], "porcentaje", 10, "x")
        updated = products_service.update_product(storage, p["id"], {"oferta_etiqueta": "Nuevo"})
        assert updated["oferta_tipo"] == "porcentaje"
        assert updated["oferta_valor"] == 10
        assert updated["oferta_etiqueta"] == "Nuevo"

    def test_update_unknown_id(self, storage):
        with pytest.raises(NotFoundError):
            products_service.update_product(storage, 99, {"nombre": "x"})

    def test_set_stock_non_numeric_becomes_zero(self, storage):
        p = make_product(storage)
        assert products_service.set_stock(storage, p["id"], "abc")["stock"] == 0


class TestPromotionListing:

    def test_clearing_promotion_removes_from_offers(self, storage):
        p = make_product(storage, precio=1000)
        other = make_product(storage, nombre="Plato")
        products_service.set_promotion(storage, p["id"], "porcentaje", 50, "Mitad")
        assert [x["id"] for x in products_service.list_promoted_products(storage)] == [p["id"]]

        cleared = products_service.set_promotion(storage, p["id"], None, 50, "Mitad")

        assert cleared["oferta_tipo"] == ""
        assert cleared["oferta_valor"] is None
        assert cleared["oferta_etiqueta"] == ""
        assert products_service.list_promoted_products(storage) == []
        assert other["oferta_activa"] is False

    def test_negative_value_clears(self, storage):
        p = make_product(storage)
        products_service.set_promotion(storage, p["id"], "porcentaje", 50, "x")
        products_service.set_promotion(storage, p["id"], "porcentaje", -5, "x")
        assert products_service.list_promoted_products(storage) == []


class TestActiveListing:

    def test_filters_inactive_and_out_of_stock(self, storage):
        visible = make_product(storage, nombre="A", stock=2)
        empty = make_product(storage, nombre="B", stock=0)
        hidden = make_product(storage, nombre="C", stock=5)
        products_service.set_product_active(storage, hidden["id"], False)

        ids = [p["id"] for p in products_service.list_active_products(storage)]

        assert ids == [visible["id"]]
        assert empty["id"] not in ids

    def test_toggle_without_boolean_flips(self, storage):
        p = make_product(storage)
        assert products_service.set_product_active(storage, p["id"], None)["activo"] is False
        assert products_service.set_product_active(storage, p["id"], None)["activo"] is True
        assert products_service.set_product_active(storage, p["id"], True)["activo"] is True

    def test_list_is_ordered_by_id(self, storage):
        for name in ("Z", "A", "M"):
            make_product(storage, nombre=name)
        assert [p["id"] for p in products_service.list_products(storage)] == [1, 2, 3]


class TestDeleteProduct:

    def test_returns_deleted_record(self, storage):
        p = make_product(storage, nombre="Jarra")
        deleted = products_service.delete_product(storage, p["id"])
        assert deleted["nombre"] == "Jarra"
        assert products_service.list_products(storage) == []

    def test_unknown_id(self, storage):
        with pytest.raises(NotFoundError):
            products_service.delete_product(storage, 42)

    def test_ids_not_reused_after_delete(self, storage):
        first = make_product(storage)
        products_service.delete_product(storage, first["id"])
        assert make_product(storage)["id"] == first["id"] + 1
