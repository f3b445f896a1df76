import re
import uuid
from datetime import datetime

from pydantic import Field, field_validator

from marketplace.models.logistics import LogisticsStatus
from marketplace.schemas.common import CamelModel, ResponseModel

DRIVER_PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")


class LogisticsCreate(CamelModel):
    offer_id: uuid.UUID | None = None
    bid_id: uuid.UUID | None = None

    driver_name: str | None = Field(default=None, max_length=255)
    driver_phone: str
    truck_number: str = Field(min_length=1, max_length=50)
    truck_type: str | None = Field(default=None, max_length=100)
    logistics_company: str = Field(min_length=1, max_length=255)
    pickup_address: str | None = None
    delivery_address: str | None = None

    estimated_pickup_date: datetime | None = None
    estimated_delivery_date: datetime

    invoice_copy: str | None = Field(default=None, max_length=1024)
    bilty_copy: str | None = Field(default=None, max_length=1024)
    insurance: bool | None = None
    notes: str | None = None
    tracking_id: str | None = Field(default=None, max_length=100)

    @field_validator("driver_phone")
    @classmethod
    def validate_driver_phone(cls, value: str) -> str:
        value = value.strip()
        if not DRIVER_PHONE_PATTERN.fullmatch(value):
            raise ValueError("Driver phone must be a valid 10-digit Indian phone number")
        return value

    @field_validator("truck_number", "logistics_company")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class LogisticsStatusUpdate(CamelModel):
    status: LogisticsStatus


class LogisticsResponse(ResponseModel):
    id: uuid.UUID
    offer_id: uuid.UUID | None
    bid_id: uuid.UUID | None
    user_id: str
    driver_name: str | None
    driver_phone: str
    truck_number: str
    truck_type: str | None
    logistics_company: str
    pickup_address: str | None
    delivery_address: str | None
    estimated_pickup_date: datetime | None
    estimated_delivery_date: datetime
    actual_pickup_date: datetime | None
    actual_delivery_date: datetime | None
    status: LogisticsStatus
    notes: str | None
    invoice_copy: str | None
    bilty_copy: str | None
    insurance: bool
    tracking_id: str | None
    created_at: datetime
    updated_at: datetime
