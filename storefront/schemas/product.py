from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _number_to_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# Codes and names sometimes arrive as JSON numbers.
Text = Annotated[str | None, BeforeValidator(_number_to_text)]


class ProductCreate(BaseModel):
    """Incoming payload for a new variant row.

    Everything is optional at this level: required fields and numeric
    fallbacks are enforced by the create service so that missing values
    produce the catalog's own validation envelope.
    """

    model_config = ConfigDict(extra="ignore")

    master_code: Text = None
    item_name: Text = None
    item_code: Text = None
    color: Text = None
    size: Text = None
    out_price: float | str | None = None
    av_price: float | str | None = None
    cur_qty: int | float | str | None = None
    group_name: Text = None
    kind_name: Text = None
    category: Text = None
    description: Text = None
    images: Text = None
    stor_id: int | float | str | None = None
    type_id: int | float | str | None = None


class ProductRowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    unique_id: str
    master_code: str | None = None
    item_code: str | None = None
    item_name: str | None = None
    kind_name: str | None = None
    group_name: str | None = None
    category: str | None = None
    description: str | None = None
    color: str | None = None
    size: str | None = None
    out_price: float
    av_price: float
    cur_qty: int
    images: str | None = None
    stor_id: int
    type_id: int
    unit_name: str | None = None
    class_name: str | None = None
    place_name: str | None = None
    unit_convert: float
    is_basic_unit: bool


class ProductCreateResponse(BaseModel):
    success: bool = True
    message: str
    product: ProductRowRead


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    kind: str
