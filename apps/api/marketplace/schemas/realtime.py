from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from marketplace.schemas.common import CamelModel

ClientEvent = Literal["join_auction", "leave_auction", "place_bid"]


class ClientFrame(CamelModel):
    event: ClientEvent
    data: dict[str, Any] = Field(default_factory=dict)


class AuctionRef(CamelModel):
    auction_id: str = Field(min_length=1)

    @field_validator("auction_id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return str(value) if isinstance(value, int) else value


class PlaceBid(AuctionRef):
    amount: float = Field(gt=0)
    user_id: str = Field(min_length=1)

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, value):
        return str(value) if isinstance(value, int) else value


class NewBid(CamelModel):
    amount: float
    user_id: str
    timestamp: datetime


class ServerFrame(CamelModel):
    event: str
    data: dict[str, Any]
