from __future__ import annotations

import math
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from marketplace.errors import NotFoundError, ValidationError
from marketplace.models.mixins import now_utc

LIKE_ESCAPE = "\\"

T = TypeVar("T")
M = TypeVar("M")

SortOrder = Literal["asc", "desc"]


@dataclass
class ListParams:
    search: str | None = None
    is_active: bool | None = None
    page: int = 1
    limit: int = 10
    sort_by: str | None = None
    sort_order: SortOrder | None = None


@dataclass
class PageResult(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def search_clause(term: str | None, *columns: InstrumentedAttribute) -> Any | None:
    if not term or not term.strip():
        return None
    needle = f"%{_escape_like(term.strip().lower())}%"
    return or_(
        *(
            func.lower(func.coalesce(column, "")).like(needle, escape=LIKE_ESCAPE)
            for column in columns
        )
    )


def _escape_like(term: str) -> str:
    for char in (LIKE_ESCAPE, "%", "_"):
        term = term.replace(char, LIKE_ESCAPE + char)
    return term


def resolve_sort(
    params: ListParams,
    columns: Mapping[str, InstrumentedAttribute],
    default_field: str,
    default_order: SortOrder,
) -> tuple[InstrumentedAttribute, SortOrder]:
    field = params.sort_by or default_field
    if field not in columns:
        allowed = ", ".join(sorted(columns))
        raise ValidationError(f"sortBy must be one of: {allowed}")
    return columns[field], params.sort_order or default_order


def paginate(
    db: Session,
    stmt: Select,
    *,
    page: int,
    limit: int,
    sort_column: InstrumentedAttribute,
    sort_order: SortOrder,
    tiebreak: InstrumentedAttribute,
) -> PageResult:
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1:
        raise ValidationError("limit must be >= 1")

    total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
    ordering = sort_column.asc() if sort_order == "asc" else sort_column.desc()
    rows = list(
        db.scalars(
            stmt.order_by(ordering, tiebreak.asc()).offset((page - 1) * limit).limit(limit)
        )
    )
    return PageResult(items=rows, total=int(total), page=page, limit=limit)


def get_or_404(db: Session, model: type[M], entity_id: uuid.UUID, label: str) -> M:
    row = db.get(model, entity_id)
    if row is None:
        raise NotFoundError(f"{label} not found")
    return row


def apply_patch(row: Any, patch: Mapping[str, Any]) -> bool:
    """Copy only the keys present in ``patch`` onto ``row``; returns whether anything changed."""
    changed = False
    for key, value in patch.items():
        if getattr(row, key) != value:
            setattr(row, key, value)
            changed = True
    if changed:
        row.updated_at = now_utc()
    return changed
