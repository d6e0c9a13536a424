from fastapi import APIRouter

from storefront.api.v1.endpoints import categories, products

api_router = APIRouter()

api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
