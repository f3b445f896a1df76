from marketplace.schemas.brand import BrandCreate, BrandListResponse, BrandResponse, BrandUpdate
from marketplace.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryTreeNode,
    CategoryUpdate,
)
from marketplace.schemas.common import MessageResponse, Page, PaginationMeta
from marketplace.schemas.counts import MasterCountsResponse
from marketplace.schemas.logistics import (
    LogisticsCreate,
    LogisticsResponse,
    LogisticsStatusUpdate,
)
from marketplace.schemas.unit import UnitCreate, UnitListResponse, UnitResponse, UnitUpdate
from marketplace.schemas.upload import UploadFileResponse

__all__ = [
    "BrandCreate",
    "BrandUpdate",
    "BrandResponse",
    "BrandListResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryListResponse",
    "CategoryTreeNode",
    "UnitCreate",
    "UnitUpdate",
    "UnitResponse",
    "UnitListResponse",
    "MasterCountsResponse",
    "LogisticsCreate",
    "LogisticsStatusUpdate",
    "LogisticsResponse",
    "UploadFileResponse",
    "MessageResponse",
    "Page",
    "PaginationMeta",
]
