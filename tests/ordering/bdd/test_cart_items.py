"""BDD tests for cart item management."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart_items.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{qty:d} of product "{product_id}" are added to the cart'))
def add_item_to_cart(cart, product_id, qty, error):
    try:
        cart.add_item(product_id=product_id, quantity=qty)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the cart item quantity is updated to {qty:d}"))
def update_cart_item_quantity(cart, qty):
    item = cart.items[0]
    cart.update_item_quantity(str(item.id), qty)


@when("the cart is cleared")
def clear_cart(cart):
    cart.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart item quantity is {qty:d}"))
def cart_item_quantity_is(cart, qty):
    assert cart.items[0].quantity == qty
