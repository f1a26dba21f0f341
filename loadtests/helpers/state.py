"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared
between users.
"""

from dataclasses import dataclass, field


@dataclass
class CartState:
    """Tracks state for a shopping cart journey."""

    cart_id: str | None = None
    item_ids: list[str] = field(default_factory=list)
    coupon_code: str | None = None
    last_total: str | None = None
