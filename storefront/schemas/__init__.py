from .catalog import (
    CatalogFilters,
    CatalogPagination,
    CatalogResponse,
    CatalogStats,
    CatalogStatsPagination,
    CategoryListResponse,
    CategoryNode,
    CategoryPageFilters,
    CategoryPageResponse,
    CategoryRead,
    DisplayRange,
    Product,
    Variant,
)
from .product import ErrorResponse, ProductCreate, ProductCreateResponse, ProductRowRead
