from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from storefront.core.config import settings
from storefront.schemas.catalog import Product, Variant


logger = logging.getLogger(__name__)


@dataclass
class _VariantDraft:
    id: str
    item_code: str | None
    color: str
    image_url: str
    cur_qty: int
    stor_id: int
    sizes: list[str] = field(default_factory=list)


@dataclass
class _ProductDraft:
    fields: dict[str, Any]
    variants: dict[str, _VariantDraft] = field(default_factory=dict)


def _image_url(raw: str | None, placeholder: str) -> str:
    if raw and raw.strip():
        return raw
    return placeholder


def group_rows(
    rows: Iterable[Any],
    placeholder_image_url: str = settings.placeholder_image_url,
    default_color: str = settings.default_color,
    no_description: str = settings.no_description_text,
) -> list[Product]:
    """Group flat variant rows into one Product per ``master_code``.

    Single pass over ``rows`` (already ordered by the caller). The first row
    of a model supplies its descriptive fields and price; the first row of
    each color supplies the variant id, image, quantity and location.
    Quantities are *not* summed across sizes: a variant's ``cur_qty`` is the
    quantity of its first row.

    A row that cannot be converted (e.g. a non-numeric quantity) is logged
    and skipped without affecting the others.
    """
    drafts: dict[str, _ProductDraft] = {}

    for row in rows:
        master_code = row.master_code
        if not master_code:
            continue

        try:
            color = row.color or default_color
            size = row.size or None
            cur_qty = int(row.cur_qty or 0)
            stor_id = int(row.stor_id or 0)
            price = float(row.out_price or 0)
        except (TypeError, ValueError):
            logger.warning(
                "Skipping malformed product row unique_id=%s master_code=%s",
                row.unique_id,
                master_code,
                exc_info=True,
            )
            continue

        draft = drafts.get(master_code)
        if draft is None:
            item_name = row.item_name or ""
            kind_name = row.kind_name or ""
            group_name = row.group_name or ""
            draft = _ProductDraft(
                fields={
                    "model_id": master_code,
                    "master_code": master_code,
                    "price": price,
                    "category": group_name,
                    "description": item_name or kind_name or no_description,
                    "group_name": group_name,
                    "kind_name": kind_name,
                    "item_name": item_name,
                    "item_code": row.item_code or "",
                    "cur_qty": cur_qty,
                }
            )
            drafts[master_code] = draft

        variant = draft.variants.get(color)
        if variant is None:
            variant = _VariantDraft(
                id=row.unique_id,
                item_code=row.item_code,
                color=color,
                image_url=_image_url(row.images, placeholder_image_url),
                cur_qty=cur_qty,
                stor_id=stor_id,
            )
            draft.variants[color] = variant

        if size and size not in variant.sizes:
            variant.sizes.append(size)

    products = []
    for draft in drafts.values():
        if not draft.variants:
            continue
        products.append(
            Product(
                **draft.fields,
                variants=[
                    Variant(
                        id=v.id,
                        item_code=v.item_code,
                        color=v.color,
                        image_url=v.image_url,
                        sizes=v.sizes,
                        cur_qty=v.cur_qty,
                        stor_id=v.stor_id,
                    )
                    for v in draft.variants.values()
                ],
            )
        )
    return products
