"""Product catalog port (abstract interface).

The pricing engine only reads from the catalog: it asks for a product by id
and gets back its unit price, or ``None`` when the product does not exist.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductSnapshot:
    """Read-only view of a catalog product at pricing time."""

    id: str
    unit_price: Decimal
    name: str = ""


class ProductCatalog(ABC):
    """Abstract product catalog interface."""

    @abstractmethod
    def lookup_product(self, product_id: str) -> ProductSnapshot | None:
        """Return the product with ``product_id`` or ``None`` if unknown."""
        ...

    def __call__(self, product_id: str) -> ProductSnapshot | None:
        return self.lookup_product(product_id)
