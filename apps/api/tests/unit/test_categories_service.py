import uuid

import pytest

from marketplace.errors import ConflictError, NotFoundError, ValidationError
from marketplace.models.product import Product
from marketplace.schemas.category import CategoryCreate, CategoryUpdate
from marketplace.services.categories_service import (
    CategoryListParams,
    category_hierarchy,
    create_category,
    delete_category,
    get_category,
    list_categories,
    update_category,
)


def _create(db, name: str, parent_id=None, **kwargs):
    return create_category(db, CategoryCreate(name=name, parent_id=parent_id, **kwargs))


def test_same_name_is_allowed_under_different_parents(db_session):
    construction = _create(db_session, "Construction")
    electrical = _create(db_session, "Electrical")

    first = _create(db_session, "Accessories", construction["id"])
    second = _create(db_session, "Accessories", electrical["id"])

    assert first["parent_id"] == construction["id"]
    assert second["parent_id"] == electrical["id"]


def test_same_name_at_same_level_conflicts(db_session):
    _create(db_session, "Cement")

    with pytest.raises(ConflictError, match="same parent level"):
        _create(db_session, "Cement")


def test_create_with_unknown_parent_is_not_found(db_session):
    with pytest.raises(NotFoundError, match="Parent category not found"):
        _create(db_session, "Orphan", uuid.uuid4())


def test_category_cannot_be_its_own_parent(db_session):
    category = _create(db_session, "Paint")

    with pytest.raises(ConflictError, match="own parent"):
        update_category(db_session, category["id"], CategoryUpdate(parent_id=category["id"]))


def test_category_cannot_move_under_its_descendant(db_session):
    root = _create(db_session, "Metals")
    child = _create(db_session, "Steel", root["id"])
    grandchild = _create(db_session, "TMT", child["id"])

    with pytest.raises(ConflictError, match="descendant"):
        update_category(db_session, root["id"], CategoryUpdate(parent_id=grandchild["id"]))


def test_null_parent_moves_category_to_top_level(db_session):
    root = _create(db_session, "Wood")
    child = _create(db_session, "Plywood", root["id"])

    moved = update_category(db_session, child["id"], CategoryUpdate(parent_id=None))

    assert moved["parent_id"] is None


def test_moving_into_a_level_with_the_same_name_conflicts(db_session):
    _create(db_session, "Pipes")
    plumbing = _create(db_session, "Plumbing")
    nested = _create(db_session, "Pipes", plumbing["id"])

    with pytest.raises(ConflictError):
        update_category(db_session, nested["id"], CategoryUpdate(parent_id=None))


def test_get_category_reports_children_and_product_counts(db_session):
    root = _create(db_session, "Tiles")
    child = _create(db_session, "Floor Tiles", root["id"])
    _create(db_session, "Wall Tiles", root["id"])
    db_session.add(Product(name="Vitrified 600x600", category_id=child["id"]))
    db_session.commit()

    assert get_category(db_session, root["id"])["children_count"] == 2
    assert get_category(db_session, child["id"])["products_count"] == 1


def test_delete_is_blocked_by_children(db_session):
    root = _create(db_session, "Glass")
    _create(db_session, "Toughened", root["id"])

    with pytest.raises(ConflictError, match="child categories"):
        delete_category(db_session, root["id"])


def test_delete_is_blocked_by_products(db_session):
    category = _create(db_session, "Sanitary")
    db_session.add(Product(name="Wash basin", category_id=category["id"]))
    db_session.commit()

    with pytest.raises(ConflictError, match="associated products"):
        delete_category(db_session, category["id"])


def test_delete_unused_category(db_session):
    category = _create(db_session, "Adhesives")

    delete_category(db_session, category["id"])

    with pytest.raises(NotFoundError):
        get_category(db_session, category["id"])


def test_list_categories_filters_by_parent(db_session):
    root = _create(db_session, "Electrical")
    _create(db_session, "Cables", root["id"])
    _create(db_session, "Switches", root["id"])
    _create(db_session, "Hardware")

    roots = list_categories(db_session, CategoryListParams(parent_id="null"))
    assert {row["name"] for row in roots.items} == {"Electrical", "Hardware"}

    subs = list_categories(db_session, CategoryListParams(parent_id="not-null"))
    assert {row["name"] for row in subs.items} == {"Cables", "Switches"}

    under_root = list_categories(db_session, CategoryListParams(parent_id=str(root["id"])))
    assert under_root.total == 2

    with pytest.raises(ValidationError):
        list_categories(db_session, CategoryListParams(parent_id="not-a-uuid"))


def test_hierarchy_lists_active_categories_in_sort_order(db_session):
    second = _create(db_session, "Roofing", sort_order=2)
    first = _create(db_session, "Flooring", sort_order=1)
    _create(db_session, "Retired", is_active=False)
    _create(db_session, "Laminate", first["id"], sort_order=2)
    _create(db_session, "Marble", first["id"], sort_order=1)
    _create(db_session, "Hidden", first["id"], is_active=False)
    _create(db_session, "Sheets", second["id"])

    tree = category_hierarchy(db_session)

    assert [node["name"] for node in tree] == ["Flooring", "Roofing"]
    assert [node["name"] for node in tree[0]["children"]] == ["Marble", "Laminate"]
    assert [node["name"] for node in tree[1]["children"]] == ["Sheets"]
