"""Cart quotation: prices a stored cart with the active catalog and settings."""

import structlog
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalog import get_catalog
from ordering.config import build_engine
from ordering.pricing.engine import OrderPricingEngine, PricingResult

logger = structlog.get_logger(__name__)


def price_cart(cart: ShoppingCart, product_lookup=None, engine: OrderPricingEngine | None = None) -> PricingResult:
    """Price ``cart`` as it is now, using the coupon stored on it."""
    engine = engine or build_engine()
    product_lookup = product_lookup or get_catalog()

    result = engine.compute_totals(
        cart.pricing_lines(),
        product_lookup,
        coupon=cart.applied_coupon,
    )

    if result.unresolved:
        logger.warning(
            "Cart quoted with unresolved lines",
            cart_id=str(cart.id),
            unresolved=list(result.unresolved),
        )
    logger.debug(
        "Cart quoted",
        cart_id=str(cart.id),
        subtotal=result.subtotal,
        discount_amount=result.discount_amount,
        total=result.total,
        currency=result.currency,
    )
    return result


def quote_cart(cart_id, product_lookup=None, engine: OrderPricingEngine | None = None) -> PricingResult:
    """Load the cart ``cart_id`` and price it."""
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    return price_cart(cart, product_lookup=product_lookup, engine=engine)
