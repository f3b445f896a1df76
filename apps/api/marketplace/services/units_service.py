import uuid

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from marketplace.errors import ConflictError
from marketplace.models.unit import Unit
from marketplace.observability import log_event
from marketplace.schemas.unit import UnitCreate, UnitUpdate
from marketplace.services.query import (
    ListParams,
    PageResult,
    apply_patch,
    get_or_404,
    paginate,
    resolve_sort,
    search_clause,
)

UNIT_SORT_COLUMNS = {
    "name": Unit.name,
    "symbol": Unit.symbol,
    "createdAt": Unit.created_at,
    "updatedAt": Unit.updated_at,
}


def _ensure_name_available(db: Session, name: str, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(Unit.id).where(Unit.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Unit.id != exclude_id)
    if db.scalar(stmt.limit(1)) is not None:
        raise ConflictError("Unit with this name already exists")


def create_unit(db: Session, payload: UnitCreate) -> Unit:
    _ensure_name_available(db, payload.name)

    unit = Unit(
        name=payload.name,
        symbol=payload.symbol,
        description=payload.description,
        is_active=payload.is_active,
    )
    db.add(unit)
    db.commit()
    db.refresh(unit)
    log_event("unit_created", entity="unit", entity_id=str(unit.id))
    return unit


def list_units(db: Session, params: ListParams) -> PageResult[Unit]:
    sort_column, sort_order = resolve_sort(params, UNIT_SORT_COLUMNS, "name", "asc")

    filters = []
    matches = search_clause(params.search, Unit.name, Unit.symbol, Unit.description)
    if matches is not None:
        filters.append(matches)
    if params.is_active is not None:
        filters.append(Unit.is_active == params.is_active)

    stmt = select(Unit)
    if filters:
        stmt = stmt.where(and_(*filters))
    return paginate(
        db,
        stmt,
        page=params.page,
        limit=params.limit,
        sort_column=sort_column,
        sort_order=sort_order,
        tiebreak=Unit.id,
    )


def get_unit(db: Session, unit_id: uuid.UUID) -> Unit:
    return get_or_404(db, Unit, unit_id, "Unit")


def update_unit(db: Session, unit_id: uuid.UUID, payload: UnitUpdate) -> Unit:
    unit = get_unit(db, unit_id)
    patch = payload.model_dump(exclude_unset=True)

    new_name = patch.get("name")
    if new_name is not None and new_name != unit.name:
        _ensure_name_available(db, new_name, exclude_id=unit.id)

    if apply_patch(unit, patch):
        db.commit()
        db.refresh(unit)
        log_event("unit_updated", entity="unit", entity_id=str(unit.id))
    return unit


def delete_unit(db: Session, unit_id: uuid.UUID) -> None:
    unit = get_unit(db, unit_id)
    db.delete(unit)
    db.commit()
    log_event("unit_deleted", entity="unit", entity_id=str(unit_id))
