"""Pydantic request/response schemas for the Catalogue API."""

from datetime import date

from pydantic import BaseModel, Field


class EstablishmentResponse(BaseModel):
    establishment_id: str
    name: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    image_url: str | None = None
    category: str | None = None
    polo: str
    polo_name: str
    rating: float | None = None
    delivery_time: str | None = None


class PoloResponse(BaseModel):
    polo: str
    name: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    unit_price: str
    category: str | None = None
    establishment_id: str | None = None
    image_url: str | None = None


class PromotionResponse(BaseModel):
    promotion_id: str
    name: str
    description: str | None = None
    establishment_id: str | None = None
    starts_on: date
    ends_on: date
    image_url: str | None = None


class RedeemPromotionRequest(BaseModel):
    session_id: str = Field(min_length=1, max_length=255)
    redeemed_on: date | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
