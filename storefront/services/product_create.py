from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from storefront.core.config import settings
from storefront.core.errors import ConflictError, ValidationError
from storefront.models.models import ProductRow
from storefront.schemas.product import ProductCreate
from storefront.services.row_store import RowStore


logger = logging.getLogger(__name__)


@dataclass
class ProductDefaults:
    """Fallback text values for optional fields of a new row."""

    color: str = settings.new_product_color
    size: str = settings.new_product_size
    group_name: str = settings.new_product_group
    kind_name: str = settings.new_product_kind
    unit_name: str = settings.new_product_unit
    place_name: str = settings.new_product_place


def _parse_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def _parse_int(value: Any) -> int:
    """Integer value of ``value``, truncating decimals; 0 when unparseable."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def build_unique_id(master_code: str, type_id: int, stor_id: int) -> str:
    return f"{master_code}-{type_id}-{stor_id}"


def create_product(
    store: RowStore,
    data: ProductCreate,
    defaults: ProductDefaults | None = None,
) -> ProductRow:
    """Validate ``data`` and insert it as a single variant row.

    Raises ``ValidationError`` before touching the store when a required
    field is missing, and ``ConflictError`` when the derived ``unique_id``
    is taken (either by the existence check or by the unique constraint).
    """
    defaults = defaults or ProductDefaults()

    master_code = (data.master_code or "").strip()
    item_name = (data.item_name or "").strip()
    if not master_code or not item_name:
        raise ValidationError("master_code and item_name are required")

    type_id = _parse_int(data.type_id)
    stor_id = _parse_int(data.stor_id)
    unique_id = build_unique_id(master_code, type_id, stor_id)

    if store.fetch_row_by_unique_id(unique_id) is not None:
        raise ConflictError(f"Product {unique_id} already exists")

    out_price = _parse_float(data.out_price)
    av_price = _parse_float(data.av_price) or out_price
    group_name = data.group_name or defaults.group_name

    row = ProductRow(
        unique_id=unique_id,
        master_code=master_code,
        item_code=data.item_code or master_code,
        item_name=item_name,
        color=data.color or defaults.color,
        size=data.size or defaults.size,
        out_price=out_price,
        av_price=av_price,
        cur_qty=_parse_int(data.cur_qty),
        group_name=group_name,
        kind_name=data.kind_name or defaults.kind_name,
        category=data.category,
        description=data.description,
        images=data.images or "",
        stor_id=stor_id,
        type_id=type_id,
        unit_name=defaults.unit_name,
        class_name=group_name,
        place_name=defaults.place_name,
        unit_convert=1.0,
        is_basic_unit=True,
    )

    row = store.insert_row(row)
    logger.info("Created product row unique_id=%s", row.unique_id)
    return row
