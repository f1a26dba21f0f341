"""Product management: commands and handler for the establishment dashboard."""

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProduct:
    product_id: Identifier()  # Optional: generated when absent
    name: String(required=True, max_length=255)
    description: Text()
    unit_price: Float(required=True, min_value=0.0)
    category: String(max_length=100)
    establishment_id: Identifier()
    image_url: String(max_length=500)


@catalogue.command(part_of="Product")
class ChangeProductPrice:
    product_id: Identifier(required=True)
    new_price: Float(required=True, min_value=0.0)


@catalogue.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            id=command.product_id,
            name=command.name,
            unit_price=command.unit_price,
            description=command.description,
            category=command.category,
            establishment_id=command.establishment_id,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(ChangeProductPrice)
    def change_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(command.new_price)
        repo.add(product)
