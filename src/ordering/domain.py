"""Ordering bounded context: Shopping Cart and order pricing.

Handles the session-scoped shopping cart (CQRS aggregate) and the
pricing engine that turns cart snapshots into order totals.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
