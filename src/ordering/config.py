"""Pricing settings for the Ordering domain, read from the environment.

    BORALLI_DELIVERY_FEE        flat delivery fee (default 5.99)
    BORALLI_CURRENCY            ISO 4217 code (default BRL)
    BORALLI_CURRENCY_PRECISION  minor-unit digits (default 2)
    BORALLI_ROUNDING            rounding mode name (default half_even)
    BORALLI_COUPONS             CODE=PERCENT pairs, comma separated
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from ordering.pricing.coupons import CouponRegistry
from ordering.pricing.engine import OrderPricingEngine, PricingConfig
from ordering.pricing.errors import PricingConfigurationError

DEFAULT_COUPONS = "BORALLI10=10,BORALLI20=20"


def _get_env(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def parse_coupons(raw: str) -> dict[str, int]:
    """Parse ``"CODE=10,OTHER=20"`` into ``{"CODE": 10, "OTHER": 20}``."""
    coupons = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        code, sep, percent = pair.partition("=")
        if not sep:
            raise PricingConfigurationError(f"Malformed coupon entry: {pair!r}")
        try:
            coupons[code.strip()] = int(percent)
        except ValueError:
            raise PricingConfigurationError(f"Malformed coupon percentage: {pair!r}") from None
    return coupons


@dataclass(frozen=True)
class PricingSettings:
    delivery_fee: str
    currency: str
    precision: int
    rounding: str
    coupons: dict

    @classmethod
    def from_env(cls) -> "PricingSettings":
        precision = _get_env("BORALLI_CURRENCY_PRECISION", "2")
        try:
            precision = int(precision)
        except ValueError:
            raise PricingConfigurationError(f"BORALLI_CURRENCY_PRECISION must be an integer, got {precision!r}") from None

        return cls(
            delivery_fee=_get_env("BORALLI_DELIVERY_FEE", "5.99"),
            currency=_get_env("BORALLI_CURRENCY", "BRL").upper(),
            precision=precision,
            rounding=_get_env("BORALLI_ROUNDING", "half_even").lower(),
            coupons=parse_coupons(_get_env("BORALLI_COUPONS", DEFAULT_COUPONS)),
        )

    def pricing_config(self) -> PricingConfig:
        return PricingConfig(
            delivery_fee=self.delivery_fee,
            currency=self.currency,
            precision=self.precision,
            rounding=self.rounding,
        )

    def coupon_registry(self) -> CouponRegistry:
        return CouponRegistry(self.coupons)


@lru_cache(maxsize=1)
def get_settings() -> PricingSettings:
    return PricingSettings.from_env()


def build_engine(settings: PricingSettings | None = None) -> OrderPricingEngine:
    """Wire an engine from ``settings`` (or the environment)."""
    settings = settings or get_settings()
    return OrderPricingEngine(settings.pricing_config(), coupons=settings.coupon_registry())
