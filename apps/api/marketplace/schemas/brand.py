import uuid
from datetime import datetime

from pydantic import Field, field_validator

from marketplace.schemas.common import CamelModel, Page, ResponseModel


class BrandCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    logo: str | None = Field(default=None, max_length=1024)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class BrandUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    logo: str | None = Field(default=None, max_length=1024)
    is_active: bool | None = None

    @field_validator("name", "is_active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value.strip() if isinstance(value, str) else value


class BrandResponse(ResponseModel):
    id: uuid.UUID
    name: str
    description: str | None
    logo: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class BrandListResponse(Page[BrandResponse]):
    pass
