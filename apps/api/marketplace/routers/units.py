import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.auth.dependencies import require_admin
from marketplace.db.session import get_db
from marketplace.routers.list_params import list_params
from marketplace.schemas.common import MessageResponse
from marketplace.schemas.unit import UnitCreate, UnitListResponse, UnitResponse, UnitUpdate
from marketplace.services.query import ListParams
from marketplace.services.units_service import (
    create_unit,
    delete_unit,
    get_unit,
    list_units,
    update_unit,
)

router = APIRouter(
    prefix="/admin/units",
    tags=["admin-units"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create unit",
)
def create_unit_endpoint(payload: UnitCreate, db: Session = Depends(get_db)) -> UnitResponse:
    return UnitResponse.model_validate(create_unit(db, payload))


@router.get("", response_model=UnitListResponse, summary="List units")
def list_units_endpoint(
    params: ListParams = Depends(list_params),
    db: Session = Depends(get_db),
) -> UnitListResponse:
    return UnitListResponse.from_result(list_units(db, params))


@router.get("/{unit_id}", response_model=UnitResponse, summary="Get unit")
def get_unit_endpoint(unit_id: uuid.UUID, db: Session = Depends(get_db)) -> UnitResponse:
    return UnitResponse.model_validate(get_unit(db, unit_id))


@router.patch("/{unit_id}", response_model=UnitResponse, summary="Update unit")
def update_unit_endpoint(
    unit_id: uuid.UUID,
    payload: UnitUpdate,
    db: Session = Depends(get_db),
) -> UnitResponse:
    return UnitResponse.model_validate(update_unit(db, unit_id, payload))


@router.delete("/{unit_id}", response_model=MessageResponse, summary="Delete unit")
def delete_unit_endpoint(unit_id: uuid.UUID, db: Session = Depends(get_db)) -> MessageResponse:
    delete_unit(db, unit_id)
    return MessageResponse(message="Unit deleted successfully")
