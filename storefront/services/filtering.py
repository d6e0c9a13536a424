"""Catalog filter engine.

Two layers share the same case-insensitive substring matching but combine
their conditions differently:

* Row level (before grouping): every active filter contributes its clauses
  to a single OR list, so category + search *widens* the result set. This
  mirrors the behaviour the public products listing has always had.
* Aggregate level (after grouping, category page): category, sub-category
  and search are ANDed.
"""

from __future__ import annotations

from typing import Iterable

from storefront.schemas.catalog import Product
from storefront.services.predicates import AllOf, AnyOf, GreaterThan, Predicate, contains_any


CATEGORY_ROW_FIELDS = ("group_name", "kind_name", "item_name", "category")
SUB_ROW_FIELDS = ("description", "kind_name", "group_name")
SEARCH_ROW_FIELDS = ("item_name", "item_code", "master_code", "color", "description")

IN_STOCK = GreaterThan(field="cur_qty", value=0)


def build_row_predicate(
    category_name: str | None = None,
    sub: str | None = None,
    search: str | None = None,
) -> Predicate:
    """Build the row-level predicate used by the products listing."""
    clauses = []
    if category_name:
        clauses.extend(contains_any(CATEGORY_ROW_FIELDS, category_name))
    if sub:
        clauses.extend(contains_any(SUB_ROW_FIELDS, sub))
    if search:
        clauses.extend(contains_any(SEARCH_ROW_FIELDS, search))

    if not clauses:
        return AllOf(clauses=(IN_STOCK,))
    return AllOf(clauses=(IN_STOCK, AnyOf(clauses=tuple(clauses))))


def _matches(values: Iterable[str | None], term: str) -> bool:
    needle = term.lower()
    return any(needle in value.lower() for value in values if value)


def _category_fields(product: Product) -> list[str | None]:
    return [product.category, product.group_name, product.kind_name, product.item_name]


def _sub_fields(product: Product) -> list[str | None]:
    return [product.description, *_category_fields(product)]


def _search_fields(product: Product) -> list[str | None]:
    return [
        *_sub_fields(product),
        product.master_code,
        *(variant.color for variant in product.variants),
    ]


def product_matches(
    product: Product,
    category_name: str,
    sub: str | None = None,
    search: str | None = None,
) -> bool:
    if not _matches(_category_fields(product), category_name):
        return False

    if sub and not _matches(_sub_fields(product), sub):
        return False

    if search and search.strip() and not _matches(_search_fields(product), search):
        return False

    return True


def filter_products(
    products: Iterable[Product],
    category_name: str,
    sub: str | None = None,
    search: str | None = None,
) -> list[Product]:
    return [p for p in products if product_matches(p, category_name, sub=sub, search=search)]
