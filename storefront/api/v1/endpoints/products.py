from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.db import get_db
from storefront.core.errors import CatalogError, InfrastructureError
from storefront.core.security import ViewerRole, get_viewer_role
from storefront.schemas import CatalogResponse, ErrorResponse, ProductCreate, ProductCreateResponse, ProductRowRead
from storefront.services.catalog import build_catalog_listing, degraded_catalog_response
from storefront.services.pagination import normalize_page_args, parse_page_number
from storefront.services.product_create import create_product
from storefront.services.row_store import RowStore


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/",
    response_model=CatalogResponse,
    summary="List grouped catalog products",
    description=(
        "Returns in-stock products grouped by model code with color/size "
        "variants, filtered by category (id or name), sub-category and "
        "search text, and paginated over the grouped models."
    ),
)
def list_products(
    category: str | None = Query(default=None, description="Category id or name"),
    sub: str | None = Query(default=None, description="Sub-category name"),
    search: str | None = Query(default=None, description="Free-text search"),
    page: str | None = Query(default=None, description="Page number, leading integer is used"),
    limit: str | None = Query(default=None, description="Page size, leading integer is used"),
    db: Session = Depends(get_db),
    role: ViewerRole = Depends(get_viewer_role),
) -> CatalogResponse:
    page_number, page_limit = normalize_page_args(
        parse_page_number(page),
        parse_page_number(limit),
        default_limit=settings.default_page_limit,
        max_limit=settings.max_page_limit,
    )
    try:
        return build_catalog_listing(
            RowStore(db),
            category=category,
            sub=sub,
            search=search,
            page=page_number,
            limit=page_limit,
            role=role,
        )
    except Exception as exc:
        logger.exception("Catalog listing failed")
        return degraded_catalog_response(exc, limit=settings.default_page_limit)


@router.post(
    "/",
    response_model=ProductCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def create_product_endpoint(data: ProductCreate, db: Session = Depends(get_db)):
    try:
        row = create_product(RowStore(db), data)
    except CatalogError:
        raise
    except Exception as exc:
        logger.exception("Unexpected error while creating product")
        raise InfrastructureError("Failed to create product") from exc

    return ProductCreateResponse(
        message="Product created",
        product=ProductRowRead.model_validate(row, from_attributes=True),
    )
