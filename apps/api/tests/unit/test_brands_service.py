import uuid

import pytest

from marketplace.errors import ConflictError, NotFoundError, ValidationError
from marketplace.schemas.brand import BrandCreate, BrandUpdate
from marketplace.services.brands_service import (
    create_brand,
    delete_brand,
    get_brand,
    list_brands,
    update_brand,
)
from marketplace.services.query import ListParams


def test_create_brand_strips_name_and_defaults_active(db_session):
    brand = create_brand(db_session, BrandCreate(name="  UltraTech  ", description="Cement"))

    assert brand.name == "UltraTech"
    assert brand.is_active is True
    assert brand.created_at is not None


def test_create_brand_rejects_duplicate_name(db_session):
    create_brand(db_session, BrandCreate(name="ACC"))

    with pytest.raises(ConflictError) as exc_info:
        create_brand(db_session, BrandCreate(name="ACC"))
    assert exc_info.value.status_code == 409
    assert exc_info.value.detail == "Brand with this name already exists"


def test_update_brand_rejects_name_taken_by_another_brand(db_session):
    create_brand(db_session, BrandCreate(name="Tata Steel"))
    other = create_brand(db_session, BrandCreate(name="JSW"))

    with pytest.raises(ConflictError):
        update_brand(db_session, other.id, BrandUpdate(name="Tata Steel"))


def test_update_brand_allows_keeping_its_own_name(db_session):
    brand = create_brand(db_session, BrandCreate(name="Ambuja", logo="https://cdn/a.png"))

    updated = update_brand(db_session, brand.id, BrandUpdate(name="Ambuja", description="New"))

    assert updated.name == "Ambuja"
    assert updated.description == "New"


def test_update_brand_only_touches_fields_that_were_sent(db_session):
    brand = create_brand(
        db_session, BrandCreate(name="Birla", description="Original", logo="https://cdn/b.png")
    )

    updated = update_brand(db_session, brand.id, BrandUpdate(is_active=False))

    assert updated.is_active is False
    assert updated.description == "Original"
    assert updated.logo == "https://cdn/b.png"


def test_update_brand_clears_nullable_field_when_null_is_sent(db_session):
    brand = create_brand(db_session, BrandCreate(name="Dalmia", logo="https://cdn/d.png"))

    updated = update_brand(db_session, brand.id, BrandUpdate(logo=None))

    assert updated.logo is None


def test_get_and_delete_unknown_brand_raise_not_found(db_session):
    missing = uuid.uuid4()

    with pytest.raises(NotFoundError, match="Brand not found"):
        get_brand(db_session, missing)
    with pytest.raises(NotFoundError):
        delete_brand(db_session, missing)


def test_delete_brand_removes_row(db_session):
    brand = create_brand(db_session, BrandCreate(name="Shree"))

    delete_brand(db_session, brand.id)

    with pytest.raises(NotFoundError):
        get_brand(db_session, brand.id)


def test_list_brands_filters_by_search_and_active_flag(db_session):
    create_brand(db_session, BrandCreate(name="Jindal Steel"))
    create_brand(db_session, BrandCreate(name="Tata Steel", is_active=False))
    create_brand(db_session, BrandCreate(name="Asian Paints", description="steel primer"))

    result = list_brands(db_session, ListParams(search="STEEL"))
    assert result.total == 3

    result = list_brands(db_session, ListParams(search="steel", is_active=True))
    assert sorted(brand.name for brand in result.items) == ["Asian Paints", "Jindal Steel"]


def test_list_brands_pages_partition_all_matches(db_session):
    created = {create_brand(db_session, BrandCreate(name=f"Brand {i:02d}")).id for i in range(25)}

    seen: list[uuid.UUID] = []
    for page in (1, 2, 3):
        result = list_brands(db_session, ListParams(page=page, limit=10, sort_by="name"))
        assert result.total == 25
        assert result.total_pages == 3
        seen.extend(brand.id for brand in result.items)

    assert len(seen) == 25
    assert set(seen) == created


def test_list_brands_sorts_by_name_in_requested_order(db_session):
    for name in ("Beta", "Alpha", "Gamma"):
        create_brand(db_session, BrandCreate(name=name))

    result = list_brands(db_session, ListParams(sort_by="name", sort_order="desc"))

    assert [brand.name for brand in result.items] == ["Gamma", "Beta", "Alpha"]


def test_list_brands_rejects_unknown_sort_field(db_session):
    with pytest.raises(ValidationError, match="sortBy must be one of"):
        list_brands(db_session, ListParams(sort_by="logo"))


def test_list_brands_search_treats_wildcard_characters_literally(db_session):
    for name in ("Shell 100% Synthetic", "Castrol 1000", "axb", "a_b", "back\\slash"):
        create_brand(db_session, BrandCreate(name=name))

    percent = list_brands(db_session, ListParams(search="100%"))
    assert [brand.name for brand in percent.items] == ["Shell 100% Synthetic"]
    assert percent.total == 1

    underscore = list_brands(db_session, ListParams(search="a_b"))
    assert [brand.name for brand in underscore.items] == ["a_b"]

    backslash = list_brands(db_session, ListParams(search="k\\s"))
    assert [brand.name for brand in backslash.items] == ["back\\slash"]
