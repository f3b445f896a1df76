import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from marketplace.errors import NotFoundError, ValidationError
from marketplace.models.bid import Bid
from marketplace.models.logistics import Logistics, LogisticsStatus
from marketplace.models.mixins import now_utc
from marketplace.models.offer import Offer
from marketplace.observability import log_event
from marketplace.schemas.logistics import LogisticsCreate
from marketplace.services.query import get_or_404
from marketplace.services.state_machine import apply_status


def _ensure_origin(db: Session, payload: LogisticsCreate) -> None:
    if payload.offer_id is None and payload.bid_id is None:
        raise ValidationError("Either offerId or bidId is required")
    if payload.offer_id is not None and payload.bid_id is not None:
        raise ValidationError("Provide only one of offerId or bidId")

    if payload.offer_id is not None and db.get(Offer, payload.offer_id) is None:
        raise NotFoundError("Offer not found")
    if payload.bid_id is not None and db.get(Bid, payload.bid_id) is None:
        raise NotFoundError("Bid not found")


def create_logistics(db: Session, payload: LogisticsCreate, user_id: str) -> Logistics:
    _ensure_origin(db, payload)

    record = Logistics(
        offer_id=payload.offer_id,
        bid_id=payload.bid_id,
        user_id=user_id,
        driver_name=payload.driver_name,
        driver_phone=payload.driver_phone,
        truck_number=payload.truck_number,
        truck_type=payload.truck_type,
        logistics_company=payload.logistics_company,
        pickup_address=payload.pickup_address,
        delivery_address=payload.delivery_address,
        estimated_pickup_date=payload.estimated_pickup_date,
        estimated_delivery_date=payload.estimated_delivery_date,
        invoice_copy=payload.invoice_copy,
        bilty_copy=payload.bilty_copy,
        insurance=bool(payload.insurance),
        notes=payload.notes,
        tracking_id=payload.tracking_id,
        status=LogisticsStatus.PENDING,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    log_event("logistics_created", entity="logistics", entity_id=str(record.id))
    return record


def get_logistics(db: Session, logistics_id: uuid.UUID) -> Logistics:
    return get_or_404(db, Logistics, logistics_id, "Logistics")


def update_logistics_status(
    db: Session, logistics_id: uuid.UUID, next_status: LogisticsStatus
) -> Logistics:
    record = get_logistics(db, logistics_id)
    previous = record.status

    now = now_utc()
    stamped = apply_status(record, next_status, now)
    record.updated_at = now
    db.commit()
    db.refresh(record)

    log_event(
        "logistics_status_updated",
        entity="logistics",
        entity_id=str(record.id),
        detail={
            "from_status": previous.value,
            "to_status": next_status.value,
            "stamped": stamped,
        },
    )
    return record


def list_logistics_for_offer(db: Session, offer_id: uuid.UUID) -> list[Logistics]:
    return list(
        db.scalars(
            select(Logistics)
            .where(Logistics.offer_id == offer_id)
            .order_by(Logistics.created_at.asc(), Logistics.id.asc())
        )
    )


def list_logistics_for_bid(db: Session, bid_id: uuid.UUID) -> list[Logistics]:
    return list(
        db.scalars(
            select(Logistics)
            .where(Logistics.bid_id == bid_id)
            .order_by(Logistics.created_at.asc(), Logistics.id.asc())
        )
    )
