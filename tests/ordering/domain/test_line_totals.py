"""Tests for OrderPricingEngine.compute_line_total and malformed-line handling."""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from ordering.catalog.memory_adapter import InMemoryCatalog
from ordering.pricing.engine import LineTotal, OrderPricingEngine, PricingConfig


@pytest.fixture()
def engine():
    return OrderPricingEngine(PricingConfig(delivery_fee="5.99", currency="BRL", precision=2, rounding="half_even"))


PRODUCTS = {
    "ipa": {"unit_price": "18.90"},
    "free-sample": {"unit_price": 0},
    "nan-price": {"unit_price": float("nan")},
    "negative": {"unit_price": "-1.00"},
    "infinite": {"unit_price": "Infinity"},
    "garbage": {"unit_price": "eighteen"},
    "no-price": {},
}


def lookup(product_id):
    return PRODUCTS.get(product_id)


class TestComputeLineTotal:
    def test_price_times_quantity(self, engine):
        total = engine.compute_line_total({"id": "1", "product_id": "ipa", "quantity": 3}, lookup)

        assert total == LineTotal(line_id="1", product_id="ipa", quantity=3, amount=Decimal("56.70"))
        assert total.is_resolved

    def test_add_ons_multiplied_by_quantity(self, engine):
        line = {
            "id": "1",
            "product_id": "ipa",
            "quantity": 2,
            "add_ons": [{"id": "a", "unit_price": "1.10"}, {"id": "b", "unit_price": 2}],
        }
        assert engine.compute_line_total(line, lookup).amount == Decimal("44.00")

    def test_free_product_is_resolved(self, engine):
        total = engine.compute_line_total({"id": "1", "product_id": "free-sample", "quantity": 5}, lookup)
        assert total.is_resolved
        assert total.amount == Decimal("0")

    def test_reads_attribute_style_lines_and_products(self, engine):
        line = SimpleNamespace(
            id="1",
            product_id="p",
            quantity=2,
            add_ons=[SimpleNamespace(id="a", name="Bacon", unit_price=Decimal("4.00"))],
        )
        total = engine.compute_line_total(line, lambda _: SimpleNamespace(unit_price=Decimal("10.00")))
        assert total.amount == Decimal("28.00")

    def test_unknown_product(self, engine):
        total = engine.compute_line_total({"id": "1", "product_id": "missing", "quantity": 1}, lookup)

        assert not total.is_resolved
        assert total.unresolved_reason == "unresolved_product"
        assert total.amount == Decimal("0")

    def test_lookup_raising_key_error_counts_as_unknown(self, engine):
        total = engine.compute_line_total({"id": "1", "product_id": "missing", "quantity": 1}, {}.__getitem__)
        assert total.unresolved_reason == "unresolved_product"

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", None, True])
    def test_invalid_quantity(self, engine, quantity):
        total = engine.compute_line_total({"id": "1", "product_id": "ipa", "quantity": quantity}, lookup)
        assert total.unresolved_reason == "invalid_quantity"

    @pytest.mark.parametrize("product_id", ["nan-price", "negative", "infinite", "garbage", "no-price"])
    def test_invalid_product_price(self, engine, product_id):
        total = engine.compute_line_total({"id": "1", "product_id": product_id, "quantity": 1}, lookup)
        assert total.unresolved_reason == "invalid_price"

    def test_invalid_add_on_price(self, engine):
        line = {"id": "1", "product_id": "ipa", "quantity": 1, "add_ons": [{"id": "a", "unit_price": "-0.50"}]}
        assert engine.compute_line_total(line, lookup).unresolved_reason == "invalid_price"


class TestMalformedLinesInTotals:
    def test_malformed_lines_do_not_block_the_rest(self, engine):
        lines = [
            {"id": "good", "product_id": "ipa", "quantity": 1},
            {"id": "zero", "product_id": "ipa", "quantity": 0},
            {"id": "nan", "product_id": "nan-price", "quantity": 1},
        ]
        result = engine.compute_totals(lines, lookup)

        assert result.subtotal == Decimal("18.90")
        assert result.total == Decimal("24.89")
        assert result.unresolved == ("zero", "nan")
        assert [line.unresolved_reason for line in result.lines] == [None, "invalid_quantity", "invalid_price"]


class TestOversizedAmounts:
    @pytest.fixture()
    def catalog(self):
        return InMemoryCatalog(
            [
                {"id": "ipa", "unit_price": "28.90"},
                {"id": "yacht", "unit_price": "1e30"},
                {"id": "micro", "unit_price": "0.0000000000001"},
            ]
        )

    @pytest.mark.parametrize("quantity", [10**17, 10**27, 10**100])
    def test_huge_quantity_is_unresolved(self, engine, catalog, quantity):
        lines = [
            {"id": "big", "product_id": "ipa", "quantity": quantity},
            {"id": "ok", "product_id": "ipa", "quantity": 1},
        ]
        result = engine.compute_totals(lines, catalog)

        assert result.unresolved == ("big",)
        assert result.lines[0].unresolved_reason == "invalid_quantity"
        assert result.subtotal == Decimal("28.90")
        assert result.total == Decimal("34.89")

    @pytest.mark.parametrize("product_id", ["yacht", "micro"])
    def test_unrepresentable_price_is_unresolved(self, engine, catalog, product_id):
        result = engine.compute_totals([{"id": "l1", "product_id": product_id, "quantity": 1}], catalog)

        assert result.lines[0].unresolved_reason == "invalid_price"
        assert result.total == Decimal("0")

    def test_add_ons_pushing_unit_total_over_the_limit(self, engine, catalog):
        line = {
            "id": "l1",
            "product_id": "ipa",
            "quantity": 1,
            "add_ons": [{"id": "a", "unit_price": "999999999999999999"}],
        }
        assert engine.compute_line_total(line, catalog).unresolved_reason == "invalid_price"

    def test_largest_quantity_below_the_limit_is_priced_exactly(self, engine, catalog):
        line = {"id": "l1", "product_id": "ipa", "quantity": 10**15}
        result = engine.compute_totals([line], catalog, delivery_fee="0")

        assert result.unresolved == ()
        assert result.subtotal == Decimal("28900000000000000.00")
        assert result.total == Decimal("28900000000000000.00")
