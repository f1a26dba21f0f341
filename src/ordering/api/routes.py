"""FastAPI routes for the Ordering domain: carts and their totals."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    ApplyCouponToCartRequest,
    CartIdResponse,
    CartTotalsResponse,
    CouponResponse,
    CreateCartRequest,
    ItemIdResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from ordering.cart.checkout import CheckoutCart
from ordering.cart.coupons import ApplyCouponToCart, RemoveCouponFromCart
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import ClearCart, CreateCart
from ordering.pricing.quotation import quote_cart

cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    command = CreateCart(
        customer_id=body.customer_id,
        session_id=body.session_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.post("/{cart_id}/items", response_model=ItemIdResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> ItemIdResponse:
    add_ons = None
    if body.add_ons is not None:
        add_ons = json.dumps(
            [
                {"id": add_on.id, "name": add_on.name, "unit_price": str(add_on.unit_price)}
                for add_on in body.add_ons
            ]
        )

    command = AddToCart(
        cart_id=cart_id,
        product_id=body.product_id,
        quantity=body.quantity,
        add_ons=add_ons,
        notes=body.notes,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=item_id)


@cart_router.put("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def update_cart_item_quantity(cart_id: str, item_id: str, body: UpdateCartQuantityRequest) -> StatusResponse:
    command = UpdateCartQuantity(
        cart_id=cart_id,
        item_id=item_id,
        new_quantity=body.new_quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(cart_id: str, item_id: str) -> StatusResponse:
    command = RemoveFromCart(
        cart_id=cart_id,
        item_id=item_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/{cart_id}/items", response_model=StatusResponse)
async def clear_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.post("/{cart_id}/coupon", response_model=CouponResponse)
async def apply_cart_coupon(cart_id: str, body: ApplyCouponToCartRequest) -> CouponResponse:
    command = ApplyCouponToCart(
        cart_id=cart_id,
        coupon_code=body.coupon_code,
    )
    result = current_domain.process(command, asynchronous=False)
    return CouponResponse(**result)


@cart_router.delete("/{cart_id}/coupon", response_model=StatusResponse)
async def remove_cart_coupon(cart_id: str) -> StatusResponse:
    current_domain.process(RemoveCouponFromCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse()


@cart_router.get("/{cart_id}/totals", response_model=CartTotalsResponse)
async def get_cart_totals(cart_id: str) -> CartTotalsResponse:
    return CartTotalsResponse(**quote_cart(cart_id).to_dict())


@cart_router.post("/{cart_id}/checkout", response_model=CartTotalsResponse)
async def checkout_cart(cart_id: str) -> CartTotalsResponse:
    """Price the cart, record the totals and empty it."""
    summary = current_domain.process(CheckoutCart(cart_id=cart_id), asynchronous=False)
    return CartTotalsResponse(**summary)
