"""BDD tests for cart checkout."""

from protean.exceptions import ValidationError
from pytest_bdd import scenarios, when

scenarios("features/cart_checkout.feature")


@when("the cart is checked out")
def check_out_cart(cart, engine, catalog, error):
    pricing = engine.compute_totals(cart.pricing_lines(), catalog, coupon=cart.applied_coupon)
    try:
        cart.check_out(pricing)
    except ValidationError as exc:
        error["exc"] = exc
