import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.auth.dependencies import AuthContext, get_auth_context
from marketplace.db.session import get_db
from marketplace.schemas.logistics import (
    LogisticsCreate,
    LogisticsResponse,
    LogisticsStatusUpdate,
)
from marketplace.services.logistics_service import (
    create_logistics,
    get_logistics,
    list_logistics_for_bid,
    list_logistics_for_offer,
    update_logistics_status,
)

router = APIRouter(prefix="/logistics", tags=["logistics"])


@router.post(
    "",
    response_model=LogisticsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record vehicle details for an offer or bid",
)
def create_logistics_endpoint(
    payload: LogisticsCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
) -> LogisticsResponse:
    return LogisticsResponse.model_validate(create_logistics(db, payload, auth.user_id))


@router.get(
    "/offer/{offer_id}",
    response_model=list[LogisticsResponse],
    summary="Logistics records for an offer, oldest first",
)
def list_offer_logistics_endpoint(
    offer_id: uuid.UUID,
    db: Session = Depends(get_db),
    _auth: AuthContext = Depends(get_auth_context),
) -> list[LogisticsResponse]:
    return [LogisticsResponse.model_validate(row) for row in list_logistics_for_offer(db, offer_id)]


@router.get(
    "/bid/{bid_id}",
    response_model=list[LogisticsResponse],
    summary="Logistics records for a bid, oldest first",
)
def list_bid_logistics_endpoint(
    bid_id: uuid.UUID,
    db: Session = Depends(get_db),
    _auth: AuthContext = Depends(get_auth_context),
) -> list[LogisticsResponse]:
    return [LogisticsResponse.model_validate(row) for row in list_logistics_for_bid(db, bid_id)]


@router.get("/{logistics_id}", response_model=LogisticsResponse, summary="Get logistics record")
def get_logistics_endpoint(
    logistics_id: uuid.UUID,
    db: Session = Depends(get_db),
    _auth: AuthContext = Depends(get_auth_context),
) -> LogisticsResponse:
    return LogisticsResponse.model_validate(get_logistics(db, logistics_id))


@router.put(
    "/{logistics_id}/status",
    response_model=LogisticsResponse,
    summary="Change logistics status",
)
def update_logistics_status_endpoint(
    logistics_id: uuid.UUID,
    payload: LogisticsStatusUpdate,
    db: Session = Depends(get_db),
    _auth: AuthContext = Depends(get_auth_context),
) -> LogisticsResponse:
    return LogisticsResponse.model_validate(
        update_logistics_status(db, logistics_id, payload.status)
    )
