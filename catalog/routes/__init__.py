from catalog.routes.cache import router as cache_router
from catalog.routes.categories import router as categories_router
from catalog.routes.products import router as products_router

__all__ = ["cache_router", "categories_router", "products_router"]
