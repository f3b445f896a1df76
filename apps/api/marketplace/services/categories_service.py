from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from marketplace.errors import ConflictError, NotFoundError, ValidationError
from marketplace.models.category import Category
from marketplace.models.listing import Listing
from marketplace.models.product import Product
from marketplace.models.requirement import Requirement
from marketplace.observability import log_event
from marketplace.schemas.category import CategoryCreate, CategoryUpdate
from marketplace.services.query import (
    ListParams,
    PageResult,
    apply_patch,
    get_or_404,
    paginate,
    resolve_sort,
    search_clause,
)

CATEGORY_SORT_COLUMNS = {
    "name": Category.name,
    "createdAt": Category.created_at,
    "updatedAt": Category.updated_at,
    "sortOrder": Category.sort_order,
}

ROOT_ONLY = "null"
SUBCATEGORIES_ONLY = "not-null"


@dataclass
class CategoryListParams(ListParams):
    parent_id: str | None = None


def _category_to_dict(row: Category, children_count: int, products_count: int) -> dict[str, Any]:
    return {
        "id": row.id,
        "name": row.name,
        "description": row.description,
        "parent_id": row.parent_id,
        "is_active": row.is_active,
        "sort_order": row.sort_order,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
        "children_count": children_count,
        "products_count": products_count,
    }


def _usage_counts(
    db: Session, category_ids: list[uuid.UUID]
) -> tuple[dict[uuid.UUID, int], dict[uuid.UUID, int]]:
    if not category_ids:
        return {}, {}
    children = dict(
        db.execute(
            select(Category.parent_id, func.count())
            .where(Category.parent_id.in_(category_ids))
            .group_by(Category.parent_id)
        ).all()
    )
    products = dict(
        db.execute(
            select(Product.category_id, func.count())
            .where(Product.category_id.in_(category_ids))
            .group_by(Product.category_id)
        ).all()
    )
    return children, products


def _to_dicts(db: Session, rows: list[Category]) -> list[dict[str, Any]]:
    children, products = _usage_counts(db, [row.id for row in rows])
    return [
        _category_to_dict(row, children.get(row.id, 0), products.get(row.id, 0)) for row in rows
    ]


def _parent_clause(parent_id: uuid.UUID | None):
    if parent_id is None:
        return Category.parent_id.is_(None)
    return Category.parent_id == parent_id


def _ensure_name_available(
    db: Session,
    name: str,
    parent_id: uuid.UUID | None,
    exclude_id: uuid.UUID | None = None,
) -> None:
    stmt = select(Category.id).where(Category.name == name, _parent_clause(parent_id))
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    if db.scalar(stmt.limit(1)) is not None:
        raise ConflictError("Category with this name already exists in the same parent level")


def _ensure_parent_exists(db: Session, parent_id: uuid.UUID) -> Category:
    parent = db.get(Category, parent_id)
    if parent is None:
        raise NotFoundError("Parent category not found")
    return parent


def _ensure_not_descendant(db: Session, category_id: uuid.UUID, parent: Category) -> None:
    seen: set[uuid.UUID] = set()
    node: Category | None = parent
    while node is not None and node.id not in seen:
        if node.id == category_id:
            raise ConflictError("Category cannot be moved under its own descendant")
        seen.add(node.id)
        node = db.get(Category, node.parent_id) if node.parent_id is not None else None


def create_category(db: Session, payload: CategoryCreate) -> dict[str, Any]:
    if payload.parent_id is not None:
        _ensure_parent_exists(db, payload.parent_id)
    _ensure_name_available(db, payload.name, payload.parent_id)

    category = Category(
        name=payload.name,
        description=payload.description,
        parent_id=payload.parent_id,
        is_active=payload.is_active,
        sort_order=payload.sort_order,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    log_event("category_created", entity="category", entity_id=str(category.id))
    return _category_to_dict(category, 0, 0)


def list_categories(db: Session, params: CategoryListParams) -> PageResult[dict[str, Any]]:
    sort_column, sort_order = resolve_sort(params, CATEGORY_SORT_COLUMNS, "sortOrder", "asc")

    filters = []
    matches = search_clause(params.search, Category.name, Category.description)
    if matches is not None:
        filters.append(matches)
    if params.is_active is not None:
        filters.append(Category.is_active == params.is_active)
    if params.parent_id is not None:
        if params.parent_id == ROOT_ONLY:
            filters.append(Category.parent_id.is_(None))
        elif params.parent_id == SUBCATEGORIES_ONLY:
            filters.append(Category.parent_id.is_not(None))
        else:
            try:
                filters.append(Category.parent_id == uuid.UUID(params.parent_id))
            except ValueError as err:
                raise ValidationError(
                    "parentId must be 'null', 'not-null' or a category id"
                ) from err

    stmt = select(Category)
    if filters:
        stmt = stmt.where(and_(*filters))
    result = paginate(
        db,
        stmt,
        page=params.page,
        limit=params.limit,
        sort_column=sort_column,
        sort_order=sort_order,
        tiebreak=Category.id,
    )
    return PageResult(
        items=_to_dicts(db, result.items),
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


def get_category(db: Session, category_id: uuid.UUID) -> dict[str, Any]:
    category = get_or_404(db, Category, category_id, "Category")
    return _to_dicts(db, [category])[0]


def update_category(
    db: Session, category_id: uuid.UUID, payload: CategoryUpdate
) -> dict[str, Any]:
    category = get_or_404(db, Category, category_id, "Category")
    patch = payload.model_dump(exclude_unset=True)

    parent_changed = "parent_id" in patch and patch["parent_id"] != category.parent_id
    target_parent_id = patch["parent_id"] if parent_changed else category.parent_id

    if parent_changed and target_parent_id is not None:
        if target_parent_id == category.id:
            raise ConflictError("Category cannot be its own parent")
        parent = _ensure_parent_exists(db, target_parent_id)
        _ensure_not_descendant(db, category.id, parent)

    target_name = patch.get("name", category.name)
    if target_name != category.name or parent_changed:
        _ensure_name_available(db, target_name, target_parent_id, exclude_id=category.id)

    if apply_patch(category, patch):
        db.commit()
        db.refresh(category)
        log_event("category_updated", entity="category", entity_id=str(category.id))
    return _to_dicts(db, [category])[0]


def delete_category(db: Session, category_id: uuid.UUID) -> None:
    category = get_or_404(db, Category, category_id, "Category")

    blockers = (
        (Category.parent_id, "Cannot delete category with child categories"),
        (Product.category_id, "Cannot delete category with associated products"),
        (Requirement.category_id, "Cannot delete category with associated requirements"),
        (Listing.category_id, "Cannot delete category with associated listings"),
    )
    for column, message in blockers:
        in_use = db.scalar(select(func.count()).where(column == category_id))
        if in_use:
            raise ConflictError(message)

    db.delete(category)
    db.commit()
    log_event("category_deleted", entity="category", entity_id=str(category_id))


def _tree_node(row: Category) -> dict[str, Any]:
    return {
        "id": row.id,
        "name": row.name,
        "description": row.description,
        "parent_id": row.parent_id,
        "is_active": row.is_active,
        "sort_order": row.sort_order,
        "children": [_tree_node(child) for child in row.children if child.is_active],
    }


def category_hierarchy(db: Session) -> list[dict[str, Any]]:
    roots = db.scalars(
        select(Category)
        .where(Category.parent_id.is_(None), Category.is_active.is_(True))
        .order_by(Category.sort_order.asc(), Category.name.asc())
    )
    return [_tree_node(root) for root in roots]
