import uuid
from datetime import datetime

from pydantic import Field, field_validator

from marketplace.schemas.common import CamelModel, Page, ResponseModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    parent_id: uuid.UUID | None = None
    is_active: bool = True
    sort_order: int = 0

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class CategoryUpdate(CamelModel):
    """``parentId: null`` moves the category to the top level; omitting it keeps the parent."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    parent_id: uuid.UUID | None = None
    is_active: bool | None = None
    sort_order: int | None = None

    @field_validator("name", "is_active", "sort_order")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value.strip() if isinstance(value, str) else value


class CategorySummary(ResponseModel):
    id: uuid.UUID
    name: str
    description: str | None
    parent_id: uuid.UUID | None
    is_active: bool
    sort_order: int


class CategoryResponse(CategorySummary):
    created_at: datetime
    updated_at: datetime
    children_count: int = 0
    products_count: int = 0


class CategoryListResponse(Page[CategoryResponse]):
    pass


class CategoryTreeNode(CategorySummary):
    children: list["CategoryTreeNode"] = Field(default_factory=list)
