from __future__ import annotations

import logging
import re
from typing import Iterable

from storefront.core.config import settings
from storefront.core.security import ViewerRole
from storefront.models.models import Category
from storefront.schemas.catalog import (
    CatalogFilters,
    CatalogPagination,
    CatalogResponse,
    CatalogStats,
    CatalogStatsPagination,
    CategoryNode,
    CategoryRead,
    Product,
)
from storefront.services.filtering import build_row_predicate
from storefront.services.grouping import group_rows
from storefront.services.pagination import Page, paginate
from storefront.services.row_store import RowStore


logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load catalog data"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Range of the integer primary key of the categories table.
_MIN_CATEGORY_ID = -(2**31)
_MAX_CATEGORY_ID = 2**31 - 1


def resolve_category_name(store: RowStore, category: str | None) -> str | None:
    """Turn a numeric category id into its name.

    Non-numeric input, ids outside the key range and ids that do not exist
    are used as-is.
    """
    if not category:
        return category

    match = _LEADING_INT.match(category)
    if match is None:
        return category

    category_id = int(match.group(1))
    if not _MIN_CATEGORY_ID <= category_id <= _MAX_CATEGORY_ID:
        logger.info("Category id %s out of range, filtering by raw value", category)
        return category

    found = store.fetch_category(category_id)
    if found is None:
        logger.info("Category id %s not found, filtering by raw value", category)
        return category
    return found.name


def build_category_tree(categories: Iterable[Category]) -> list[CategoryNode]:
    """Attach to every category the categories whose ``sub`` names it."""
    reads = [CategoryRead.model_validate(c, from_attributes=True) for c in categories]

    children: dict[str, list[CategoryRead]] = {}
    for cat in reads:
        if cat.sub:
            children.setdefault(cat.sub, []).append(cat)

    return [
        CategoryNode(**cat.model_dump(), sub_categories=children.get(cat.name, []))
        for cat in reads
    ]


def apply_viewer_role(products: list[Product], role: ViewerRole) -> list[Product]:
    """Hide stock quantities from anyone who is not a verified employee."""
    if role == ViewerRole.EMPLOYEE:
        return products

    return [
        product.model_copy(
            update={
                "cur_qty": None,
                "variants": [v.model_copy(update={"cur_qty": None}) for v in product.variants],
            }
        )
        for product in products
    ]


def pagination_block(page: Page) -> CatalogPagination:
    return CatalogPagination(
        current_page=page.current_page,
        total_pages=page.total_pages,
        total_products=page.total_items,
        limit=page.limit,
        has_next_page=page.has_next_page,
        has_prev_page=page.has_prev_page,
    )


def build_catalog_listing(
    store: RowStore,
    category: str | None = None,
    sub: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = settings.default_page_limit,
    role: ViewerRole = ViewerRole.CUSTOMER,
) -> CatalogResponse:
    """Grouped, filtered and paginated product listing.

    Filtering happens on raw rows (see ``build_row_predicate`` for the
    OR-union semantics), then rows are grouped into models and the models
    are paginated, so totals always count grouped models.
    """
    category_name = resolve_category_name(store, category)
    logger.debug(
        "Catalog listing category=%r sub=%r search=%r page=%s limit=%s",
        category_name,
        sub,
        search,
        page,
        limit,
    )

    rows = store.fetch_rows(build_row_predicate(category_name, sub, search))
    products = group_rows(rows)
    result = paginate(products, page, limit)
    categories = build_category_tree(store.fetch_categories())

    logger.info(
        "Catalog listing: %s rows -> %s models, page %s/%s",
        len(rows),
        len(products),
        result.current_page,
        result.total_pages,
    )

    pagination = pagination_block(result)
    stats = CatalogStats(
        total_raw_products=len(rows),
        total_grouped_products=len(products),
        filtered_by_category=bool(category_name),
        filtered_by_sub=bool(sub),
        filtered_by_search=bool(search),
        pagination=CatalogStatsPagination(
            **pagination.model_dump(),
            skip=result.skip,
            take=result.limit,
        ),
    )

    return CatalogResponse(
        success=True,
        products=apply_viewer_role(result.items, role),
        categories=categories,
        pagination=pagination,
        stats=stats,
        filters=CatalogFilters(category=category_name, sub=sub, search=search),
    )


def degraded_catalog_response(
    exc: Exception,
    limit: int = settings.default_page_limit,
) -> CatalogResponse:
    """Well-formed empty envelope returned when the listing cannot be built."""
    detail = str(exc) if settings.expose_error_details else exc.__class__.__name__
    return CatalogResponse(
        success=False,
        pagination=CatalogPagination(limit=limit),
        stats=CatalogStats(error=detail),
        error=LOAD_ERROR_MESSAGE,
    )
