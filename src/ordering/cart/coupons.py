"""Cart coupon management: commands and handler.

The handler decides which coupon applies by resolving the code against the
configured registry, then stores the decision on the cart. Unknown codes
are rejected and leave the cart untouched.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.config import build_engine
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class ApplyCouponToCart:
    """Apply a coupon code to a shopping cart."""

    cart_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=100)


@ordering.command(part_of="ShoppingCart")
class RemoveCouponFromCart:
    cart_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartCouponHandler:
    @handle(ApplyCouponToCart)
    def apply_coupon(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)

        coupon = build_engine().apply_coupon(command.coupon_code)
        if coupon is None:
            logger.info(
                "Coupon not applied to cart",
                cart_id=str(command.cart_id),
                coupon_code=command.coupon_code,
            )
            raise ValidationError({"coupon_code": ["Invalid coupon"]})

        cart.apply_coupon(coupon_code=coupon.code, percent_off=coupon.percent_off)
        repo.add(cart)
        return {"coupon_code": coupon.code, "percent_off": coupon.percent_off}

    @handle(RemoveCouponFromCart)
    def remove_coupon(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_coupon()
        repo.add(cart)
