"""Coupon codes and the registry they are matched against."""

from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from ordering.pricing.errors import CouponNotFound, PricingConfigurationError

logger = structlog.get_logger(__name__)


def normalize_code(code) -> str:
    return str(code or "").strip().upper()


@dataclass(frozen=True)
class Coupon:
    """A discount code and the percentage it takes off the subtotal."""

    code: str
    percent_off: int

    def __post_init__(self):
        if isinstance(self.percent_off, bool) or not isinstance(self.percent_off, int):
            raise PricingConfigurationError(f"percent_off must be an integer, got {self.percent_off!r}")
        if not 0 <= self.percent_off <= 100:
            raise PricingConfigurationError(f"percent_off must be within [0, 100], got {self.percent_off}")
        object.__setattr__(self, "code", normalize_code(self.code))
        if not self.code:
            raise PricingConfigurationError("Coupon code must not be blank")


class CouponRegistry:
    """Fixed mapping from normalized coupon code to ``percent_off``.

    Codes are matched exactly after trimming and upper-casing. There is no
    prefix or fuzzy matching.
    """

    def __init__(self, coupons: Mapping[str, int]):
        self._coupons = {}
        for code, percent_off in coupons.items():
            coupon = Coupon(code=code, percent_off=percent_off)
            if coupon.code in self._coupons:
                raise PricingConfigurationError(f"Duplicate coupon code: {coupon.code}")
            self._coupons[coupon.code] = coupon

    def __contains__(self, code) -> bool:
        return normalize_code(code) in self._coupons

    def __len__(self) -> int:
        return len(self._coupons)

    @property
    def codes(self) -> list[str]:
        return sorted(self._coupons)

    def lookup(self, code) -> Coupon:
        """Return the coupon matching ``code`` or raise ``CouponNotFound``."""
        normalized = normalize_code(code)
        try:
            return self._coupons[normalized]
        except KeyError:
            raise CouponNotFound(normalized) from None


def apply_coupon(code, registry: CouponRegistry) -> Coupon | None:
    """Resolve ``code`` against ``registry`` without storing anything.

    Returns ``None`` when the code is unknown; the caller decides how to tell
    the shopper and where to keep the chosen coupon.
    """
    try:
        return registry.lookup(code)
    except CouponNotFound as exc:
        logger.info("Coupon rejected", coupon_code=exc.code)
        return None
