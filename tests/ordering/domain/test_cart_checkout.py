"""Tests for checking out a ShoppingCart with a pricing result."""

import json
from decimal import Decimal

import pytest
from ordering.cart.cart import CartStatus, ShoppingCart
from ordering.cart.events import CartCheckedOut
from ordering.catalog.memory_adapter import InMemoryCatalog
from ordering.pricing.engine import OrderPricingEngine, PricingConfig
from protean.exceptions import ValidationError


@pytest.fixture()
def engine():
    return OrderPricingEngine(PricingConfig(delivery_fee="5.99", currency="BRL", precision=2, rounding="half_even"))


@pytest.fixture()
def catalog():
    return InMemoryCatalog([{"id": "2", "unit_price": "28.90"}, {"id": "3", "unit_price": "49.90"}])


def _price(cart, engine, catalog):
    return engine.compute_totals(cart.pricing_lines(), catalog, coupon=cart.applied_coupon)


class TestCheckOut:
    def test_check_out_empties_cart_and_records_totals(self, engine, catalog):
        cart = ShoppingCart.create(customer_id="cust-001")
        cart.add_item("2", 1, add_ons=[{"id": "a1", "name": "Queijo extra", "unit_price": "3.50"}])
        cart.apply_coupon("BORALLI10", 10)
        cart._events.clear()

        cart.check_out(_price(cart, engine, catalog))

        assert cart.status == CartStatus.CHECKED_OUT.value
        assert len(cart.items) == 0
        assert cart.coupon_code is None
        assert cart.percent_off == 0

        event = cart._events[-1]
        assert isinstance(event, CartCheckedOut)
        assert event.subtotal == "32.40"
        assert event.discount_amount == "3.24"
        assert event.delivery_fee == "5.99"
        assert event.total == "35.15"
        assert event.currency == "BRL"
        assert event.coupon_code == "BORALLI10"
        items = json.loads(event.items)
        assert items[0]["product_id"] == "2"
        assert items[0]["add_ons"][0]["unit_price"] == "3.50"

    def test_empty_cart_cannot_be_checked_out(self, engine, catalog):
        cart = ShoppingCart.create()
        with pytest.raises(ValidationError):
            cart.check_out(_price(cart, engine, catalog))

    def test_unresolved_lines_block_checkout(self, engine, catalog):
        cart = ShoppingCart.create()
        cart.add_item("2", 1)
        cart.add_item("ghost", 1)
        pricing = _price(cart, engine, catalog)
        assert pricing.total == Decimal("34.89")

        with pytest.raises(ValidationError) as exc:
            cart.check_out(pricing)
        assert "items" in exc.value.messages
        assert len(cart.items) == 2

    def test_checked_out_cart_rejects_changes(self, engine, catalog):
        cart = ShoppingCart.create()
        item_id = cart.add_item("3", 1)
        cart.check_out(_price(cart, engine, catalog))

        with pytest.raises(ValidationError):
            cart.add_item("3", 1)
        with pytest.raises(ValidationError):
            cart.update_item_quantity(item_id, 2)
        with pytest.raises(ValidationError):
            cart.apply_coupon("BORALLI10", 10)
        with pytest.raises(ValidationError):
            cart.clear()
        with pytest.raises(ValidationError):
            cart.check_out(_price(cart, engine, catalog))
