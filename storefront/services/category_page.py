from __future__ import annotations

import logging

from storefront.core.config import settings
from storefront.core.security import ViewerRole
from storefront.schemas.catalog import (
    CatalogPagination,
    CategoryPageFilters,
    CategoryPageResponse,
    CategoryRead,
    DisplayRange,
)
from storefront.services.catalog import LOAD_ERROR_MESSAGE, apply_viewer_role, pagination_block
from storefront.services.filtering import build_row_predicate, filter_products
from storefront.services.grouping import group_rows
from storefront.services.pagination import paginate
from storefront.services.row_store import RowStore


logger = logging.getLogger(__name__)


def build_category_page(
    store: RowStore,
    category_id: int,
    sub: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = settings.category_page_limit,
    role: ViewerRole = ViewerRole.CUSTOMER,
) -> CategoryPageResponse:
    """Products of one category, filtered after grouping.

    All in-stock rows are grouped first; category, sub-category and search
    are then applied to the grouped models and must all match.
    """
    categories = store.fetch_categories()
    category = next((c for c in categories if c.id == category_id), None)

    if category is None:
        logger.info("Category page requested for unknown category id=%s", category_id)
        products = []
        sub_categories = []
    else:
        # Only sub-categories with an image are offered as filter chips.
        sub_categories = [
            CategoryRead.model_validate(c, from_attributes=True)
            for c in categories
            if c.sub == category.name and c.image
        ]
        rows = store.fetch_rows(build_row_predicate())
        products = filter_products(group_rows(rows), category.name, sub=sub, search=search)
        logger.info(
            "Category page %r: %s rows, %s models after filtering",
            category.name,
            len(rows),
            len(products),
        )

    result = paginate(products, page, limit)
    first, last = result.display_range()

    return CategoryPageResponse(
        success=True,
        category=CategoryRead.model_validate(category, from_attributes=True) if category else None,
        sub_categories=sub_categories,
        products=apply_viewer_role(result.items, role),
        pagination=pagination_block(result),
        display_range=DisplayRange(first=first, last=last),
        limit_options=settings.page_limit_options,
        filters=CategoryPageFilters(sub=sub, search=search),
    )


def degraded_category_page(
    limit: int = settings.category_page_limit,
    sub: str | None = None,
    search: str | None = None,
) -> CategoryPageResponse:
    """Empty category page returned when the store cannot be read."""
    return CategoryPageResponse(
        success=False,
        pagination=CatalogPagination(limit=limit),
        display_range=DisplayRange(first=0, last=0),
        limit_options=settings.page_limit_options,
        filters=CategoryPageFilters(sub=sub, search=search),
        error=LOAD_ERROR_MESSAGE,
    )
