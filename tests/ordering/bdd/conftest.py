"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartCouponApplied,
    CartCouponRemoved,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.catalog.memory_adapter import InMemoryCatalog
from ordering.pricing.coupons import CouponRegistry
from ordering.pricing.engine import OrderPricingEngine, PricingConfig
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartQuantityUpdated": CartQuantityUpdated,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
    "CartCouponApplied": CartCouponApplied,
    "CartCouponRemoved": CartCouponRemoved,
    "CartCheckedOut": CartCheckedOut,
}


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def catalog():
    return InMemoryCatalog()


@pytest.fixture()
def engine():
    config = PricingConfig(delivery_fee="5.99", currency="BRL", precision=2, rounding="half_even")
    return OrderPricingEngine(config, coupons=CouponRegistry({"BORALLI10": 10, "BORALLI20": 20}))


@pytest.fixture()
def quote():
    """Container for the latest pricing result."""
    return {"result": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an active cart", target_fixture="cart")
def active_cart():
    cart = ShoppingCart.create(customer_id="cust-001")
    cart._events.clear()
    return cart


@given("a guest cart", target_fixture="cart")
def guest_cart():
    cart = ShoppingCart.create(session_id="sess-001")
    cart._events.clear()
    return cart


@given(parsers.cfparse('the catalog sells product "{product_id}" at {price}'))
def catalog_sells(catalog, product_id, price):
    catalog.add({"id": product_id, "unit_price": price})


@given(parsers.cfparse('the cart has {quantity:d} of product "{product_id}"'), target_fixture="cart")
def cart_with_product(cart, quantity, product_id):
    cart.add_item(product_id=product_id, quantity=quantity)
    cart._events.clear()
    return cart


@given(
    parsers.cfparse('the cart has {quantity:d} of product "{product_id}" with add-on "{name}" at {price}'),
    target_fixture="cart",
)
def cart_with_product_and_add_on(cart, quantity, product_id, name, price):
    cart.add_item(product_id=product_id, quantity=quantity, add_ons=[{"name": name, "unit_price": price}])
    cart._events.clear()
    return cart


@given(parsers.cfparse('the coupon "{code}" is on the cart'), target_fixture="cart")
def cart_with_coupon(cart, engine, code):
    coupon = engine.apply_coupon(code)
    cart.apply_coupon(coupon.code, coupon.percent_off)
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart status is "{status}"'))
def cart_status_is(cart, status):
    assert cart.status == status


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a ValidationError but none was raised"


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"


@then(parsers.cfparse("the cart has {count:d} item"))
def cart_has_n_items_singular(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart has {count:d} items"))
def cart_has_n_items(cart, count):
    assert len(cart.items) == count
