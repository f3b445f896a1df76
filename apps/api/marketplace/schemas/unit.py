import uuid
from datetime import datetime

from pydantic import Field, field_validator

from marketplace.schemas.common import CamelModel, Page, ResponseModel


class UnitCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    symbol: str | None = Field(default=None, max_length=20)
    description: str | None = None
    is_active: bool = True

    @field_validator("name", "symbol")
    @classmethod
    def strip_strings(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return value.strip()


class UnitUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    symbol: str | None = Field(default=None, max_length=20)
    description: str | None = None
    is_active: bool | None = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value.strip() if isinstance(value, str) else value


class UnitResponse(ResponseModel):
    id: uuid.UUID
    name: str
    symbol: str | None
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UnitListResponse(Page[UnitResponse]):
    pass
