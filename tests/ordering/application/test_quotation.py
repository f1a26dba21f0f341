"""Application tests for pricing stored carts."""

from decimal import Decimal

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.catalog import get_catalog, set_catalog
from ordering.catalog.memory_adapter import InMemoryCatalog
from ordering.pricing.engine import OrderPricingEngine, PricingConfig
from ordering.pricing.quotation import price_cart, quote_cart
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


@pytest.fixture()
def catalog():
    catalog = InMemoryCatalog(
        [
            {"id": "3", "unit_price": "49.90"},
            {"id": "4", "unit_price": "19.90"},
        ]
    )
    set_catalog(catalog)
    return catalog


def _stored_cart(*lines, coupon=None):
    cart = ShoppingCart.create(session_id="sess-001")
    for product_id, quantity in lines:
        cart.add_item(product_id, quantity)
    if coupon:
        cart.apply_coupon(*coupon)
    current_domain.repository_for(ShoppingCart).add(cart)
    return str(cart.id)


class TestQuoteCart:
    def test_quote_uses_active_catalog(self, catalog):
        cart_id = _stored_cart(("3", 2), ("4", 1))

        result = quote_cart(cart_id)

        assert result.subtotal == Decimal("119.70")
        assert result.delivery_fee == Decimal("5.99")
        assert result.total == Decimal("125.69")

    def test_quote_applies_stored_coupon(self, catalog):
        cart_id = _stored_cart(("3", 1), coupon=("BORALLI20", 20))

        result = quote_cart(cart_id)

        assert result.discount_amount == Decimal("9.98")
        assert result.total == Decimal("45.91")
        assert result.coupon.code == "BORALLI20"

    def test_empty_cart_with_coupon_costs_nothing(self, catalog):
        cart_id = _stored_cart(coupon=("BORALLI20", 20))
        result = quote_cart(cart_id)
        assert result.total == Decimal("0")
        assert result.delivery_fee == Decimal("0")

    def test_quote_does_not_modify_cart(self, catalog):
        cart_id = _stored_cart(("3", 1), ("missing", 1))

        result = quote_cart(cart_id)

        assert len(result.unresolved) == 1
        cart = current_domain.repository_for(ShoppingCart).get(cart_id)
        assert len(cart.items) == 2

    def test_unknown_cart(self, catalog):
        with pytest.raises(ObjectNotFoundError):
            quote_cart("no-such-cart")


class TestPriceCart:
    def test_explicit_engine_and_lookup(self):
        cart = ShoppingCart.create()
        cart.add_item("x", 3)
        engine = OrderPricingEngine(PricingConfig(delivery_fee="0", currency="USD", precision=2, rounding="half_even"))

        result = price_cart(cart, product_lookup=lambda _: {"unit_price": "1.10"}, engine=engine)

        assert result.total == Decimal("3.30")
        assert result.currency == "USD"

    def test_default_catalog_is_empty(self):
        cart = ShoppingCart.create()
        cart.add_item("3", 1)

        assert len(get_catalog()) == 0
        result = price_cart(cart)
        assert result.unresolved == (str(cart.items[0].id),)
        assert result.total == Decimal("0")
