"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A product was added to an establishment's menu."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    unit_price: Float(required=True)
    category: String()
    establishment_id: Identifier()
    added_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductPriceChanged:
    """The unit price of a product changed. Carts re-price on their next quotation."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    changed_at: DateTime(required=True)
