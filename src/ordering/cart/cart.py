"""Shopping Cart aggregate (CQRS): session-scoped cart priced on demand.

The cart tracks the lines a shopper (customer or guest session) selected,
with optional add-ons and notes, and the coupon the caller decided to apply.
It never computes money itself: pricing is delegated to the pricing engine
through ``pricing_lines()`` snapshots.
"""

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from ordering.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartCouponApplied,
    CartCouponRemoved,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from ordering.domain import ordering
from ordering.pricing.coupons import Coupon
from ordering.pricing.errors import InvalidPrice
from ordering.pricing.money import format_amount, to_decimal


class CartStatus(Enum):
    ACTIVE = "Active"
    CHECKED_OUT = "CheckedOut"


def _serialize_add_ons(add_ons):
    """Validate add-ons and render them as a JSON array with decimal-string prices."""
    if not isinstance(add_ons, list | tuple):
        raise ValidationError({"add_ons": ["Add-ons must be a list"]})

    serialized = []
    seen_ids = set()
    for add_on in add_ons:
        if not isinstance(add_on, Mapping):
            raise ValidationError({"add_ons": [f"Add-on must be an object, got {add_on!r}"]})
        add_on_id = str(add_on.get("id") or uuid4())
        if add_on_id in seen_ids:
            raise ValidationError({"add_ons": [f"Duplicate add-on id: {add_on_id}"]})
        seen_ids.add(add_on_id)

        try:
            unit_price = to_decimal(add_on.get("unit_price"), "add_on.unit_price")
        except InvalidPrice:
            raise ValidationError(
                {"add_ons": [f"Add-on {add_on_id} must have a non-negative unit price"]}
            ) from None

        serialized.append(
            {
                "id": add_on_id,
                "name": add_on.get("name") or "",
                "unit_price": str(unit_price),
            }
        )
    return json.dumps(serialized)


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    add_ons = Text()  # JSON: list of {id, name, unit_price}
    notes = String(max_length=500)
    added_at = DateTime()

    @property
    def add_on_list(self):
        return json.loads(self.add_ons) if self.add_ons else []


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier()  # Nullable for guest carts
    session_id = String(max_length=255)  # For guest cart identification
    items = HasMany(CartItem)
    coupon_code = String(max_length=50)
    percent_off = Integer(min_value=0, max_value=100, default=0)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def checked_out_cart_must_be_empty(self):
        if self.status == CartStatus.CHECKED_OUT.value and self.items:
            raise ValidationError({"cart": ["A checked-out cart cannot hold items"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id=None, session_id=None):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            session_id=session_id,
            status=CartStatus.ACTIVE.value,
            percent_off=0,
            created_at=now,
            updated_at=now,
        )

    def _ensure_active(self, message):
        if CartStatus(self.status) != CartStatus.ACTIVE:
            raise ValidationError({"status": [message]})

    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in cart"]})
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity=1, add_ons=None, notes=None):
        """Add a product to the cart, or increase its quantity if already present.

        Supplied ``add_ons`` and ``notes`` replace those of an existing line.
        """
        self._ensure_active("Items can only be added to an active cart")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        existing = next((i for i in self.items if str(i.product_id) == str(product_id)), None)
        serialized_add_ons = _serialize_add_ons(add_ons) if add_ons is not None else None

        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            if serialized_add_ons is not None:
                existing.add_ons = serialized_add_ons
            if notes is not None:
                existing.notes = notes
            item_id = str(existing.id)
        else:
            item = CartItem(
                product_id=product_id,
                quantity=quantity,
                add_ons=serialized_add_ons or json.dumps([]),
                notes=notes,
                added_at=now,
            )
            self.add_items(item)
            item_id = str(item.id)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=item_id,
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return item_id

    def update_item_quantity(self, item_id, new_quantity):
        """Set the quantity of a cart item; zero or less removes the item."""
        self._ensure_active("Item quantities can only be updated in an active cart")
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
            raise ValidationError({"new_quantity": ["Quantity must be an integer"]})

        item = self._find_item(item_id)
        if new_quantity <= 0:
            self.remove_item(item_id)
            return

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, item_id):
        """Remove an item from the cart."""
        self._ensure_active("Items can only be removed from an active cart")
        item = self._find_item(item_id)

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
            )
        )

    def clear(self):
        """Remove every item from the cart."""
        self._ensure_active("Only an active cart can be cleared")

        removed = list(self.items)
        for item in removed:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                items_removed_count=len(removed),
            )
        )

    # -------------------------------------------------------------------
    # Coupon management
    # -------------------------------------------------------------------
    def apply_coupon(self, coupon_code, percent_off):
        """Store the coupon chosen by the caller, replacing any previous one."""
        self._ensure_active("Coupons can only be applied to an active cart")
        if isinstance(percent_off, bool) or not isinstance(percent_off, int) or not 0 <= percent_off <= 100:
            raise ValidationError({"percent_off": ["Percent off must be an integer between 0 and 100"]})

        self.coupon_code = coupon_code
        self.percent_off = percent_off
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCouponApplied(
                cart_id=str(self.id),
                coupon_code=coupon_code,
                percent_off=percent_off,
            )
        )

    def remove_coupon(self):
        self._ensure_active("Coupons can only be removed from an active cart")
        if not self.coupon_code:
            raise ValidationError({"coupon_code": ["No coupon applied"]})

        coupon_code = self.coupon_code
        self.coupon_code = None
        self.percent_off = 0
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCouponRemoved(
                cart_id=str(self.id),
                coupon_code=coupon_code,
            )
        )

    @property
    def applied_coupon(self):
        if not self.coupon_code:
            return None
        return Coupon(code=self.coupon_code, percent_off=self.percent_off or 0)

    # -------------------------------------------------------------------
    # Pricing snapshot
    # -------------------------------------------------------------------
    def pricing_lines(self):
        """Snapshot of the cart lines in the shape the pricing engine reads."""
        return [
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "add_ons": item.add_on_list,
                "notes": item.notes,
            }
            for item in self.items
        ]

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Cart lifecycle
    # -------------------------------------------------------------------
    def check_out(self, pricing):
        """Record the priced totals, empty the cart and mark it checked out."""
        self._ensure_active("Only active carts can be checked out")
        if not self.items:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})
        if pricing.unresolved:
            raise ValidationError({"items": ["Cart has items that could not be priced"]})

        items_snapshot = [
            {
                "product_id": line["product_id"],
                "quantity": line["quantity"],
                "add_ons": line["add_ons"],
                "notes": line["notes"],
            }
            for line in self.pricing_lines()
        ]
        coupon_code = self.coupon_code

        for item in list(self.items):
            self.remove_items(item)
        self.coupon_code = None
        self.percent_off = 0
        self.status = CartStatus.CHECKED_OUT.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                customer_id=str(self.customer_id) if self.customer_id else None,
                items=json.dumps(items_snapshot),
                subtotal=format_amount(pricing.subtotal, pricing.precision),
                discount_amount=format_amount(pricing.discount_amount, pricing.precision),
                delivery_fee=format_amount(pricing.delivery_fee, pricing.precision),
                total=format_amount(pricing.total, pricing.precision),
                currency=pricing.currency,
                coupon_code=coupon_code,
                checked_out_at=now,
            )
        )
