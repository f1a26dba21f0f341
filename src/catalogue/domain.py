"""Catalogue bounded context: establishments, their products and promotions.

Owns the read-only product catalog consumed by order pricing, the
establishments grouped by polo, and the promotions shoppers can redeem
while they are running.
"""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
