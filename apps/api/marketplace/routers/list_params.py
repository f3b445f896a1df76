from typing import Literal

from fastapi import Query

from marketplace.services.categories_service import CategoryListParams
from marketplace.services.query import ListParams


def list_params(
    search: str | None = Query(default=None),
    is_active: bool | None = Query(default=None, alias="isActive"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: Literal["asc", "desc"] | None = Query(default=None, alias="sortOrder"),
) -> ListParams:
    return ListParams(
        search=search,
        is_active=is_active,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def category_list_params(
    search: str | None = Query(default=None),
    is_active: bool | None = Query(default=None, alias="isActive"),
    parent_id: str | None = Query(
        default=None,
        alias="parentId",
        description="'null' for top-level categories, 'not-null' for subcategories, or a parent id",
    ),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: Literal["asc", "desc"] | None = Query(default=None, alias="sortOrder"),
) -> CategoryListParams:
    return CategoryListParams(
        search=search,
        is_active=is_active,
        parent_id=parent_id,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
