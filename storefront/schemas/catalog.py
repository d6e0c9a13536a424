from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Variant(BaseModel):
    """One color of a model, with the sizes seen for that color."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    item_code: str | None = Field(default=None, alias="itemCode")
    color: str
    image_url: str = Field(alias="imageUrl")
    sizes: list[str] = Field(default_factory=list)
    # Quantity of the first row seen for this color; hidden from customers.
    cur_qty: int | None = None
    stor_id: int = 0


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model_id: str = Field(alias="modelId")
    master_code: str
    price: float = 0
    category: str = ""
    description: str = ""
    group_name: str = ""
    kind_name: str = ""
    item_name: str = ""
    item_code: str = ""
    cur_qty: int | None = None
    variants: list[Variant] = Field(default_factory=list)


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str | None = None
    kind: str | None = None
    sub: str | None = None


class CategoryNode(CategoryRead):
    sub_categories: list[CategoryRead] = Field(default_factory=list)


class CatalogPagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    total_products: int = Field(default=0, alias="totalProducts")
    limit: int = 20
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_prev_page: bool = Field(default=False, alias="hasPrevPage")


class CatalogStatsPagination(CatalogPagination):
    skip: int = 0
    take: int = 0


class CatalogStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_raw_products: int = Field(default=0, alias="totalRawProducts")
    total_grouped_products: int = Field(default=0, alias="totalGroupedProducts")
    filtered_by_category: bool = Field(default=False, alias="filteredByCategory")
    filtered_by_sub: bool = Field(default=False, alias="filteredBySub")
    filtered_by_search: bool = Field(default=False, alias="filteredBySearch")
    pagination: CatalogStatsPagination | None = None
    error: str | None = None


class CatalogFilters(BaseModel):
    category: str | None = None
    sub: str | None = None
    search: str | None = None


class CatalogResponse(BaseModel):
    success: bool
    products: list[Product] = Field(default_factory=list)
    categories: list[CategoryNode] = Field(default_factory=list)
    pagination: CatalogPagination = Field(default_factory=CatalogPagination)
    stats: CatalogStats = Field(default_factory=CatalogStats)
    filters: CatalogFilters | None = None
    error: str | None = None


class DisplayRange(BaseModel):
    first: int
    last: int


class CategoryPageFilters(BaseModel):
    sub: str | None = None
    search: str | None = None


class CategoryPageResponse(BaseModel):
    success: bool
    category: CategoryRead | None = None
    sub_categories: list[CategoryRead] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)
    pagination: CatalogPagination
    display_range: DisplayRange
    limit_options: list[int] = Field(default_factory=list)
    filters: CategoryPageFilters
    error: str | None = None


class CategoryListResponse(BaseModel):
    success: bool
    categories: list[CategoryNode] = Field(default_factory=list)
    error: str | None = None
