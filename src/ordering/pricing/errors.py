"""Error taxonomy of the pricing engine.

The engine raises these internally while validating a line and converts
them into structured results. Only ``PricingConfigurationError`` escapes to
callers, because it signals a wiring bug rather than bad data.
"""


class PricingError(Exception):
    """Base class for pricing anomalies."""

    reason = "pricing_error"


class UnresolvedProduct(PricingError):
    reason = "unresolved_product"

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product {product_id!r} not found in catalog")


class InvalidQuantity(PricingError):
    reason = "invalid_quantity"

    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Invalid quantity: {quantity!r}")


class InvalidPrice(PricingError):
    reason = "invalid_price"

    def __init__(self, price, field="unit_price"):
        self.price = price
        self.field = field
        super().__init__(f"Invalid {field}: {price!r}")


class CouponNotFound(PricingError, LookupError):
    reason = "coupon_not_found"

    def __init__(self, code):
        self.code = code
        super().__init__(f"Coupon {code!r} not found")


class PricingConfigurationError(ValueError):
    """Raised eagerly when the engine is wired with missing or invalid settings."""
