import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.auth.dependencies import require_admin
from marketplace.db.session import get_db
from marketplace.routers.list_params import category_list_params
from marketplace.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryTreeNode,
    CategoryUpdate,
)
from marketplace.schemas.common import MessageResponse
from marketplace.services.categories_service import (
    CategoryListParams,
    category_hierarchy,
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)

router = APIRouter(
    prefix="/admin/categories",
    tags=["admin-categories"],
    dependencies=[Depends(require_admin)],
)

public_router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category_endpoint(
    payload: CategoryCreate, db: Session = Depends(get_db)
) -> CategoryResponse:
    return CategoryResponse.model_validate(create_category(db, payload))


@router.get("", response_model=CategoryListResponse, summary="List categories")
def list_categories_endpoint(
    params: CategoryListParams = Depends(category_list_params),
    db: Session = Depends(get_db),
) -> CategoryListResponse:
    return CategoryListResponse.from_result(list_categories(db, params))


@router.get("/{category_id}", response_model=CategoryResponse, summary="Get category")
def get_category_endpoint(
    category_id: uuid.UUID, db: Session = Depends(get_db)
) -> CategoryResponse:
    return CategoryResponse.model_validate(get_category(db, category_id))


@router.patch("/{category_id}", response_model=CategoryResponse, summary="Update category")
def update_category_endpoint(
    category_id: uuid.UUID,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
) -> CategoryResponse:
    return CategoryResponse.model_validate(update_category(db, category_id, payload))


@router.delete("/{category_id}", response_model=MessageResponse, summary="Delete category")
def delete_category_endpoint(
    category_id: uuid.UUID, db: Session = Depends(get_db)
) -> MessageResponse:
    delete_category(db, category_id)
    return MessageResponse(message="Category deleted successfully")


@public_router.get(
    "",
    response_model=list[CategoryTreeNode],
    summary="Active category hierarchy",
)
def category_hierarchy_endpoint(db: Session = Depends(get_db)) -> list[CategoryTreeNode]:
    return [CategoryTreeNode.model_validate(node) for node in category_hierarchy(db)]
