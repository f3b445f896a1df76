import uuid

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from marketplace.errors import ConflictError
from marketplace.models.brand import Brand
from marketplace.observability import log_event
from marketplace.schemas.brand import BrandCreate, BrandUpdate
from marketplace.services.query import (
    ListParams,
    PageResult,
    apply_patch,
    get_or_404,
    paginate,
    resolve_sort,
    search_clause,
)

BRAND_SORT_COLUMNS = {
    "name": Brand.name,
    "createdAt": Brand.created_at,
    "updatedAt": Brand.updated_at,
}


def _ensure_name_available(db: Session, name: str, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(Brand.id).where(Brand.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Brand.id != exclude_id)
    if db.scalar(stmt.limit(1)) is not None:
        raise ConflictError("Brand with this name already exists")


def create_brand(db: Session, payload: BrandCreate) -> Brand:
    _ensure_name_available(db, payload.name)

    brand = Brand(
        name=payload.name,
        description=payload.description,
        logo=payload.logo,
        is_active=payload.is_active,
    )
    db.add(brand)
    db.commit()
    db.refresh(brand)
    log_event("brand_created", entity="brand", entity_id=str(brand.id))
    return brand


def list_brands(db: Session, params: ListParams) -> PageResult[Brand]:
    sort_column, sort_order = resolve_sort(params, BRAND_SORT_COLUMNS, "createdAt", "desc")

    filters = []
    matches = search_clause(params.search, Brand.name, Brand.description)
    if matches is not None:
        filters.append(matches)
    if params.is_active is not None:
        filters.append(Brand.is_active == params.is_active)

    stmt = select(Brand)
    if filters:
        stmt = stmt.where(and_(*filters))
    return paginate(
        db,
        stmt,
        page=params.page,
        limit=params.limit,
        sort_column=sort_column,
        sort_order=sort_order,
        tiebreak=Brand.id,
    )


def get_brand(db: Session, brand_id: uuid.UUID) -> Brand:
    return get_or_404(db, Brand, brand_id, "Brand")


def update_brand(db: Session, brand_id: uuid.UUID, payload: BrandUpdate) -> Brand:
    brand = get_brand(db, brand_id)
    patch = payload.model_dump(exclude_unset=True)

    new_name = patch.get("name")
    if new_name is not None and new_name != brand.name:
        _ensure_name_available(db, new_name, exclude_id=brand.id)

    if apply_patch(brand, patch):
        db.commit()
        db.refresh(brand)
        log_event("brand_updated", entity="brand", entity_id=str(brand.id))
    return brand


def delete_brand(db: Session, brand_id: uuid.UUID) -> None:
    brand = get_brand(db, brand_id)
    db.delete(brand)
    db.commit()
    log_event("brand_deleted", entity="brand", entity_id=str(brand_id))
