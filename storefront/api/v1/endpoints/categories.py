from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.db import get_db
from storefront.core.security import ViewerRole, get_viewer_role
from storefront.schemas import CategoryListResponse, CategoryPageResponse
from storefront.services.catalog import LOAD_ERROR_MESSAGE, build_category_tree
from storefront.services.category_page import build_category_page, degraded_category_page
from storefront.services.pagination import normalize_page_args, parse_page_number
from storefront.services.row_store import RowStore


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)) -> CategoryListResponse:
    try:
        categories = build_category_tree(RowStore(db).fetch_categories())
    except Exception:
        logger.exception("Category list failed")
        return CategoryListResponse(success=False, categories=[], error=LOAD_ERROR_MESSAGE)
    return CategoryListResponse(success=True, categories=categories)


@router.get(
    "/{category_id}/products",
    response_model=CategoryPageResponse,
    summary="Products of a single category",
    description=(
        "Groups all in-stock products, then keeps the models matching the "
        "category and, when given, the sub-category and search text."
    ),
)
def category_products(
    category_id: int,
    sub: str | None = Query(default=None),
    search: str | None = Query(default=None),
    page: str | None = Query(default=None, description="Page number, leading integer is used"),
    limit: str | None = Query(default=None, description="Page size, leading integer is used"),
    db: Session = Depends(get_db),
    role: ViewerRole = Depends(get_viewer_role),
) -> CategoryPageResponse:
    page_number, page_limit = normalize_page_args(
        parse_page_number(page),
        parse_page_number(limit),
        default_limit=settings.category_page_limit,
        max_limit=settings.max_page_limit,
    )
    try:
        return build_category_page(
            RowStore(db),
            category_id=category_id,
            sub=sub,
            search=search,
            page=page_number,
            limit=page_limit,
            role=role,
        )
    except Exception:
        logger.exception("Category page failed for category id=%s", category_id)
        return degraded_category_page(limit=settings.category_page_limit, sub=sub, search=search)
