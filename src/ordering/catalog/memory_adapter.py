"""Dictionary-backed product catalog for development and testing."""

from decimal import Decimal

from ordering.catalog.port import ProductCatalog, ProductSnapshot


class InMemoryCatalog(ProductCatalog):
    def __init__(self, products=None) -> None:
        self._products: dict[str, ProductSnapshot] = {}
        for product in products or []:
            self.add(product)

    def add(self, product) -> ProductSnapshot:
        """Register a product given as a ``ProductSnapshot`` or a mapping."""
        if not isinstance(product, ProductSnapshot):
            product = ProductSnapshot(
                id=str(product["id"]),
                unit_price=Decimal(str(product["unit_price"])),
                name=product.get("name", ""),
            )
        self._products[product.id] = product
        return product

    def lookup_product(self, product_id: str) -> ProductSnapshot | None:
        return self._products.get(str(product_id))

    def __len__(self) -> int:
        return len(self._products)
