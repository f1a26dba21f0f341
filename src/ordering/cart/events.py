"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the shopping cart (or its quantity increased)."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartItemRemoved:
    """An item was removed from the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """All items were removed from the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed_count = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCouponApplied:
    """A coupon was stored on the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    coupon_code = String(required=True)
    percent_off = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCouponRemoved:
    """The stored coupon was dropped from the shopping cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    coupon_code = String(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCheckedOut:
    """The cart was priced and checked out. Amounts are decimal strings."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier()
    items = Text(required=True)  # JSON: list of {product_id, quantity, add_ons, notes}
    subtotal = String(required=True)
    discount_amount = String(required=True)
    delivery_fee = String(required=True)
    total = String(required=True)
    currency = String(required=True, max_length=3)
    coupon_code = String()
    checked_out_at = DateTime(required=True)
