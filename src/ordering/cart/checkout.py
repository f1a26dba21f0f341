"""Cart checkout: command and handler.

Prices the cart with the active catalog, records the totals on the cart
and empties it. Payment is out of scope; the returned summary is what the
shopper is asked to pay.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.pricing.quotation import price_cart


@ordering.command(part_of="ShoppingCart")
class CheckoutCart:
    cart_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class CheckoutCartHandler:
    @handle(CheckoutCart)
    def checkout(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        pricing = price_cart(cart)
        cart.check_out(pricing)
        repo.add(cart)
        return pricing.to_dict()
