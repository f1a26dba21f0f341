"""FastAPI routes for the Catalogue domain: establishments, products and promotions."""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    EstablishmentResponse,
    PoloResponse,
    ProductResponse,
    PromotionResponse,
    RedeemPromotionRequest,
    StatusResponse,
)
from catalogue.establishment.establishment import ALL_POLOS, POLOS, Establishment
from catalogue.establishment.registration import establishment_ids_in, establishments_in
from catalogue.product.product import Product
from catalogue.promotion.redemption import RedeemPromotion, running_promotions

establishment_router = APIRouter(prefix="/establishments", tags=["establishments"])
product_router = APIRouter(prefix="/products", tags=["products"])
promotion_router = APIRouter(prefix="/promotions", tags=["promotions"])


def _establishment_response(establishment) -> EstablishmentResponse:
    return EstablishmentResponse(
        establishment_id=str(establishment.id),
        name=establishment.name,
        description=establishment.description,
        address=establishment.address,
        phone=establishment.phone,
        email=establishment.email,
        image_url=establishment.image_url,
        category=establishment.category,
        polo=establishment.polo,
        polo_name=establishment.polo_name,
        rating=establishment.rating,
        delivery_time=establishment.delivery_time,
    )


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        unit_price=f"{Decimal(str(product.unit_price)):.2f}",
        category=product.category,
        establishment_id=str(product.establishment_id) if product.establishment_id else None,
        image_url=product.image_url,
    )


# --- Establishment endpoints ---


@establishment_router.get("", response_model=list[EstablishmentResponse])
async def list_establishments(polo: str | None = None, category: str | None = None) -> list[EstablishmentResponse]:
    """List establishments, optionally filtered by polo and category."""
    return [_establishment_response(e) for e in establishments_in(polo=polo, category=category)]


@establishment_router.get("/polos", response_model=list[PoloResponse])
async def list_polos() -> list[PoloResponse]:
    return [PoloResponse(polo=ALL_POLOS, name="Todos os Polos")] + [
        PoloResponse(polo=polo, name=name) for polo, name in POLOS.items()
    ]


@establishment_router.get("/{establishment_id}", response_model=EstablishmentResponse)
async def get_establishment(establishment_id: str) -> EstablishmentResponse:
    establishment = current_domain.repository_for(Establishment).get(establishment_id)
    return _establishment_response(establishment)


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(
    category: str | None = None,
    establishment_id: str | None = None,
    polo: str | None = None,
    q: str | None = None,
) -> list[ProductResponse]:
    """List products, optionally filtered by category, establishment, polo and a name search."""
    query = current_domain.repository_for(Product)._dao.query
    if category:
        query = query.filter(category__iexact=category)
    if establishment_id:
        query = query.filter(establishment_id=establishment_id)
    polo_ids = establishment_ids_in(polo)
    if polo_ids is not None:
        query = query.filter(establishment_id__in=polo_ids)

    products = query.all().items
    if q:
        needle = q.strip().lower()
        products = [p for p in products if needle in p.name.lower() or needle in (p.description or "").lower()]

    return [_product_response(p) for p in sorted(products, key=lambda p: p.name)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return _product_response(product)


# --- Promotion endpoints ---


@promotion_router.get("", response_model=list[PromotionResponse])
async def list_running_promotions(
    on: date | None = None,
    establishment_id: str | None = None,
    polo: str | None = None,
) -> list[PromotionResponse]:
    return [
        PromotionResponse(
            promotion_id=str(p.id),
            name=p.name,
            description=p.description,
            establishment_id=str(p.establishment_id) if p.establishment_id else None,
            starts_on=p.starts_on,
            ends_on=p.ends_on,
            image_url=p.image_url,
        )
        for p in running_promotions(on_date=on, establishment_id=establishment_id, polo=polo)
    ]


@promotion_router.post("/{promotion_id}/redemptions", status_code=201, response_model=StatusResponse)
async def redeem_promotion(promotion_id: str, body: RedeemPromotionRequest) -> StatusResponse:
    command = RedeemPromotion(
        promotion_id=promotion_id,
        session_id=body.session_id,
        redeemed_on=body.redeemed_on,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
