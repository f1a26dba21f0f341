"""Product aggregate: an item an establishment sells, at a unit price."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded, ProductPriceChanged


@catalogue.aggregate(limit=None)
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    unit_price: Float(required=True, min_value=0.0)
    category: String(max_length=100)
    establishment_id: Identifier()
    image_url: String(max_length=500)

    @classmethod
    def create(cls, name, unit_price, description=None, category=None, establishment_id=None, image_url=None, id=None):
        kwargs = {"id": id} if id is not None else {}
        product = cls(
            name=name,
            unit_price=unit_price,
            description=description,
            category=category,
            establishment_id=establishment_id,
            image_url=image_url,
            **kwargs,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                unit_price=product.unit_price,
                category=product.category,
                establishment_id=product.establishment_id,
                added_at=datetime.now(UTC),
            )
        )
        return product

    def change_price(self, new_price):
        if new_price is None or new_price < 0:
            raise ValidationError({"unit_price": ["Unit price must be zero or positive"]})

        previous_price = self.unit_price
        self.unit_price = new_price

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
                changed_at=datetime.now(UTC),
            )
        )
