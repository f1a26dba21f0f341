"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Money leaves the API as decimal strings.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddOnSchema(BaseModel):
    id: str | None = None
    name: str = ""
    unit_price: Decimal = Field(ge=0)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    customer_id: str | None = None
    session_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": None,
                    "session_id": "sess-guest-001",
                }
            ]
        }
    }


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)
    add_ons: list[AddOnSchema] | None = None
    notes: str | None = Field(default=None, max_length=500)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "2",
                    "quantity": 1,
                    "add_ons": [{"id": "1", "name": "Queijo extra", "unit_price": "3.50"}],
                    "notes": "Sem cebola",
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    new_quantity: int  # Zero or less removes the item


class ApplyCouponToCartRequest(BaseModel):
    coupon_code: str = Field(min_length=1, max_length=100)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartIdResponse(BaseModel):
    cart_id: str


class ItemIdResponse(BaseModel):
    item_id: str


class CouponResponse(BaseModel):
    coupon_code: str
    percent_off: int


class StatusResponse(BaseModel):
    status: str = "ok"


class LineTotalResponse(BaseModel):
    line_id: str | None
    product_id: str | None
    quantity: int | None
    line_total: str
    unresolved_reason: str | None = None


class CartTotalsResponse(BaseModel):
    subtotal: str
    discount_amount: str
    delivery_fee: str
    total: str
    currency: str
    coupon_code: str | None = None
    percent_off: int = 0
    item_count: int = 0
    lines: list[LineTotalResponse] = []
    unresolved: list[str] = []
