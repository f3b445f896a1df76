from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from marketplace.services.query import PageResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseModel(CamelModel):
    model_config = ConfigDict(from_attributes=True)


class PaginationMeta(ResponseModel):
    page: int
    limit: int
    total: int
    total_pages: int


T = TypeVar("T")


class Page(ResponseModel, Generic[T]):
    data: list[T]
    pagination: PaginationMeta

    @classmethod
    def from_result(cls, result: PageResult) -> "Page[T]":
        return cls.model_validate(
            {
                "data": result.items,
                "pagination": {
                    "page": result.page,
                    "limit": result.limit,
                    "total": result.total,
                    "total_pages": result.total_pages,
                },
            },
            from_attributes=True,
        )


class MessageResponse(ResponseModel):
    message: str
