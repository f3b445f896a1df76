import enum
import uuid

from sqlalchemy import Enum, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.db.base import Base
from marketplace.models.mixins import IdMixin, TimestampMixin


class BidStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    OUTBID = "OUTBID"
    WON = "WON"
    LOST = "LOST"


class Bid(IdMixin, TimestampMixin, Base):
    """Buyer proposal against a seller listing."""

    __tablename__ = "bids"

    listing_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    bidder_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[BidStatus] = mapped_column(
        Enum(BidStatus, name="bid_status"), nullable=False, default=BidStatus.ACTIVE
    )
