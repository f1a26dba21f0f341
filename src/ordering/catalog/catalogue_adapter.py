"""Product catalog backed by the Catalogue domain's Product repository."""

from decimal import Decimal

import structlog
from protean.exceptions import ObjectNotFoundError

from ordering.catalog.port import ProductCatalog, ProductSnapshot

logger = structlog.get_logger(__name__)


class CatalogueProductCatalog(ProductCatalog):
    """Looks products up inside the Catalogue domain context.

    Prices are read through ``str`` so the float stored by the catalogue
    becomes the decimal the merchant typed.
    """

    def __init__(self, domain=None) -> None:
        if domain is None:
            from catalogue.domain import catalogue

            domain = catalogue
        self.domain = domain

    def lookup_product(self, product_id: str) -> ProductSnapshot | None:
        from catalogue.product.product import Product

        with self.domain.domain_context():
            try:
                product = self.domain.repository_for(Product).get(str(product_id))
            except ObjectNotFoundError:
                logger.debug("Product not found in catalogue", product_id=str(product_id))
                return None

            return ProductSnapshot(
                id=str(product.id),
                unit_price=Decimal(str(product.unit_price)),
                name=product.name,
            )
