from fastapi import APIRouter
from inventory_api.api.v1.endpoints.health import router as health_router
from inventory_api.api.v1.endpoints.legacy_products import router as legacy_products_router
from inventory_api.api.v1.endpoints.products import router as products_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(products_router, prefix="/products", tags=["products"])
api_router.include_router(legacy_products_router, prefix="/produtos", include_in_schema=False)
