import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base
from marketplace.models.mixins import IdMixin, TimestampMixin


class LogisticsStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Logistics(IdMixin, TimestampMixin, Base):
    """One vehicle's shipment against an accepted offer or a won bid."""

    __tablename__ = "logistics"
    __table_args__ = (
        CheckConstraint(
            "offer_id IS NOT NULL OR bid_id IS NOT NULL",
            name="ck_logistics_offer_or_bid",
        ),
    )

    offer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("offers.id", ondelete="CASCADE"), nullable=True, index=True
    )
    bid_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("bids.id", ondelete="CASCADE"), nullable=True, index=True
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    driver_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    driver_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    truck_number: Mapped[str] = mapped_column(String(50), nullable=False)
    truck_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    logistics_company: Mapped[str] = mapped_column(String(255), nullable=False)
    pickup_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    estimated_pickup_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    estimated_delivery_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    actual_pickup_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    actual_delivery_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    status: Mapped[LogisticsStatus] = mapped_column(
        Enum(LogisticsStatus, name="logistics_status"),
        nullable=False,
        default=LogisticsStatus.PENDING,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    invoice_copy: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    bilty_copy: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    insurance: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tracking_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
