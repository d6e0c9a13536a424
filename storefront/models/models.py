from __future__ import annotations

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ProductRow(Base):
    """One stocked variant: a model in a given color/size at a location."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    unique_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    master_code: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    item_code: Mapped[str | None] = mapped_column(String(100), nullable=True)
    item_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    kind_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    group_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)

    out_price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    av_price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    cur_qty: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    images: Mapped[str | None] = mapped_column(Text, nullable=True)
    stor_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    unit_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    class_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    place_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    unit_convert: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    is_basic_unit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    kind: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Name of the parent category; children are linked by name, not id.
    sub: Mapped[str | None] = mapped_column(String(255), nullable=True)
