"""Product catalog factory for order pricing.

Provides get_catalog() / set_catalog() to swap implementations:
- InMemoryCatalog for development and testing (empty by default)
- CatalogueProductCatalog reading the Catalogue domain's products
"""

from ordering.catalog.memory_adapter import InMemoryCatalog
from ordering.catalog.port import ProductCatalog

_current_catalog: ProductCatalog | None = None


def get_catalog() -> ProductCatalog:
    """Return the current product catalog. Defaults to an empty InMemoryCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = InMemoryCatalog()
    return _current_catalog


def set_catalog(catalog: ProductCatalog) -> None:
    """Override the active product catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to default catalog."""
    global _current_catalog
    _current_catalog = None
