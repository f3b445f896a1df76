import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.auth.dependencies import require_admin
from marketplace.db.session import get_db
from marketplace.routers.list_params import list_params
from marketplace.schemas.brand import BrandCreate, BrandListResponse, BrandResponse, BrandUpdate
from marketplace.schemas.common import MessageResponse
from marketplace.services.brands_service import (
    create_brand,
    delete_brand,
    get_brand,
    list_brands,
    update_brand,
)
from marketplace.services.query import ListParams

router = APIRouter(
    prefix="/admin/brands",
    tags=["admin-brands"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "",
    response_model=BrandResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create brand",
)
def create_brand_endpoint(payload: BrandCreate, db: Session = Depends(get_db)) -> BrandResponse:
    return BrandResponse.model_validate(create_brand(db, payload))


@router.get("", response_model=BrandListResponse, summary="List brands")
def list_brands_endpoint(
    params: ListParams = Depends(list_params),
    db: Session = Depends(get_db),
) -> BrandListResponse:
    return BrandListResponse.from_result(list_brands(db, params))


@router.get("/{brand_id}", response_model=BrandResponse, summary="Get brand")
def get_brand_endpoint(brand_id: uuid.UUID, db: Session = Depends(get_db)) -> BrandResponse:
    return BrandResponse.model_validate(get_brand(db, brand_id))


@router.patch("/{brand_id}", response_model=BrandResponse, summary="Update brand")
def update_brand_endpoint(
    brand_id: uuid.UUID,
    payload: BrandUpdate,
    db: Session = Depends(get_db),
) -> BrandResponse:
    return BrandResponse.model_validate(update_brand(db, brand_id, payload))


@router.delete("/{brand_id}", response_model=MessageResponse, summary="Delete brand")
def delete_brand_endpoint(brand_id: uuid.UUID, db: Session = Depends(get_db)) -> MessageResponse:
    delete_brand(db, brand_id)
    return MessageResponse(message="Brand deleted successfully")
