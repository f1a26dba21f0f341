"""Order pricing engine: line totals, subtotal, discount, delivery fee and total.

The engine is a pure computation over a snapshot of cart lines. It keeps no
state between calls, performs no I/O, and never raises for malformed data:
a line it cannot price is reported as unresolved and left out of the totals.

Money is handled as ``Decimal``. Line totals are exact; the configured
precision and rounding mode are applied once, to the aggregated amounts.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, Inexact, localcontext

import structlog

from ordering.pricing.coupons import Coupon, CouponRegistry, apply_coupon
from ordering.pricing.errors import (
    InvalidPrice,
    InvalidQuantity,
    PricingConfigurationError,
    PricingError,
    UnresolvedProduct,
)
from ordering.pricing.money import (
    EXACT_CONTEXT,
    MAX_AMOUNT,
    MAX_SCALE,
    ROUNDING_MODES,
    ZERO,
    format_amount,
    quantize,
    to_decimal,
)

logger = structlog.get_logger(__name__)

ProductLookup = Callable[[str], object]


def _field(obj, name, default=None):
    """Read ``name`` from a mapping or an attribute-bearing object."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PricingConfig:
    """Explicit engine settings. None of them has a default."""

    delivery_fee: Decimal
    currency: str
    precision: int
    rounding: str

    def __post_init__(self):
        if self.delivery_fee is None:
            raise PricingConfigurationError("delivery_fee is required")
        try:
            object.__setattr__(self, "delivery_fee", to_decimal(self.delivery_fee, "delivery_fee"))
        except PricingError as exc:
            raise PricingConfigurationError(str(exc)) from None

        if not self.currency or len(self.currency) != 3:
            raise PricingConfigurationError(f"currency must be an ISO 4217 code, got {self.currency!r}")
        if (
            isinstance(self.precision, bool)
            or not isinstance(self.precision, int)
            or not 0 <= self.precision <= MAX_SCALE
        ):
            raise PricingConfigurationError(
                f"precision must be an integer between 0 and {MAX_SCALE}, got {self.precision!r}"
            )
        if self.rounding not in ROUNDING_MODES:
            raise PricingConfigurationError(
                f"rounding must be one of {sorted(ROUNDING_MODES)}, got {self.rounding!r}"
            )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LineTotal:
    """Priced line. ``amount`` is exact and zero when the line is unresolved."""

    line_id: str | None
    product_id: str | None
    quantity: object
    amount: Decimal = ZERO
    unresolved_reason: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.unresolved_reason is None


@dataclass(frozen=True)
class PricingResult:
    subtotal: Decimal
    discount_amount: Decimal
    delivery_fee: Decimal
    total: Decimal
    currency: str
    precision: int
    coupon: Coupon | None = None
    lines: tuple[LineTotal, ...] = field(default_factory=tuple)

    @property
    def unresolved(self) -> tuple:
        return tuple(line.line_id for line in self.lines if not line.is_resolved)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines if line.is_resolved)

    def to_dict(self) -> dict:
        """Serializable summary with amounts rendered at the configured precision."""
        return {
            "subtotal": format_amount(self.subtotal, self.precision),
            "discount_amount": format_amount(self.discount_amount, self.precision),
            "delivery_fee": format_amount(self.delivery_fee, self.precision),
            "total": format_amount(self.total, self.precision),
            "currency": self.currency,
            "coupon_code": self.coupon.code if self.coupon else None,
            "percent_off": self.coupon.percent_off if self.coupon else 0,
            "item_count": self.item_count,
            "lines": [
                {
                    "line_id": line.line_id,
                    "product_id": line.product_id,
                    "quantity": line.quantity,
                    "line_total": format_amount(line.amount, self.precision),
                    "unresolved_reason": line.unresolved_reason,
                }
                for line in self.lines
            ],
            "unresolved": list(self.unresolved),
        }


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class OrderPricingEngine:
    """Computes order totals for cart snapshots.

    A line may be a mapping or an object exposing ``id``, ``product_id``,
    ``quantity`` and ``add_ons`` (each add-on exposing ``unit_price``). The
    product lookup returns an object or mapping with ``unit_price``, or
    ``None`` when the product does not exist.
    """

    def __init__(self, config: PricingConfig, coupons: CouponRegistry | None = None):
        if config is None:
            raise PricingConfigurationError("PricingConfig is required")
        self.config = config
        self.coupons = coupons

    def _quantize(self, amount: Decimal) -> Decimal:
        return quantize(amount, self.config.precision, self.config.rounding)

    def _price_line(self, line, product_lookup: ProductLookup) -> Decimal:
        quantity = _field(line, "quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantity(quantity)

        product_id = _field(line, "product_id")
        try:
            product = product_lookup(product_id)
        except LookupError:
            product = None
        if product is None:
            raise UnresolvedProduct(product_id)

        unit_price = to_decimal(_field(product, "unit_price"), "unit_price")
        with localcontext(EXACT_CONTEXT):
            add_ons_price = sum(
                (
                    to_decimal(_field(add_on, "unit_price"), "add_on.unit_price")
                    for add_on in _field(line, "add_ons") or ()
                ),
                ZERO,
            )
            unit_total = unit_price + add_ons_price
            if unit_total >= MAX_AMOUNT:
                raise InvalidPrice(unit_total, "unit_price")

            try:
                amount = unit_total * quantity
            except Inexact:
                raise InvalidQuantity(quantity) from None

        # Line amounts stay below MAX_AMOUNT so any cart subtotal is exact.
        if amount >= MAX_AMOUNT:
            raise InvalidQuantity(quantity)
        return amount

    def compute_line_total(self, line, product_lookup: ProductLookup) -> LineTotal:
        """Price one line; unresolvable or malformed lines come back flagged."""
        line_id = _field(line, "id")
        product_id = _field(line, "product_id")
        quantity = _field(line, "quantity")

        try:
            amount = self._price_line(line, product_lookup)
        except PricingError as exc:
            logger.debug(
                "Line left unpriced",
                line_id=line_id,
                product_id=product_id,
                reason=exc.reason,
                detail=str(exc),
            )
            return LineTotal(
                line_id=line_id,
                product_id=product_id,
                quantity=quantity,
                unresolved_reason=exc.reason,
            )

        return LineTotal(line_id=line_id, product_id=product_id, quantity=quantity, amount=amount)

    def apply_coupon(self, code, registry: CouponRegistry | None = None) -> Coupon | None:
        """Return the coupon for ``code`` or ``None``; nothing is stored."""
        registry = registry if registry is not None else self.coupons
        if registry is None:
            raise PricingConfigurationError("No coupon registry configured")
        return apply_coupon(code, registry)

    def compute_totals(
        self,
        lines: Iterable,
        product_lookup: ProductLookup,
        coupon: Coupon | None = None,
        delivery_fee=None,
    ) -> PricingResult:
        """Compute the full pricing summary for a cart snapshot.

        ``delivery_fee`` overrides the configured fee for this call only.
        """
        if delivery_fee is None:
            fee = self.config.delivery_fee
        else:
            try:
                fee = to_decimal(delivery_fee, "delivery_fee")
            except PricingError as exc:
                raise PricingConfigurationError(str(exc)) from None

        line_totals = tuple(self.compute_line_total(line, product_lookup) for line in lines or ())
        resolved = [line for line in line_totals if line.is_resolved]

        with localcontext(EXACT_CONTEXT):
            subtotal = self._quantize(sum((line.amount for line in resolved), ZERO))
            percent_off = coupon.percent_off if coupon is not None else 0
            discount = self._quantize(subtotal * percent_off / 100)
            fee = self._quantize(fee) if resolved else self._quantize(ZERO)
            total = self._quantize(max(ZERO, subtotal - discount + fee))

        return PricingResult(
            subtotal=subtotal,
            discount_amount=discount,
            delivery_fee=fee,
            total=total,
            currency=self.config.currency,
            precision=self.config.precision,
            coupon=coupon,
            lines=line_totals,
        )
