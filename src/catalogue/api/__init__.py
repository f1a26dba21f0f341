from catalogue.api.routes import establishment_router, product_router, promotion_router

__all__ = ["establishment_router", "product_router", "promotion_router"]
