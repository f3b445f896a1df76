import threading

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import marketplace.models  # noqa: F401
from marketplace.auth.jwt import issue_jwt
from marketplace.config import settings
from marketplace.db.base import Base
from marketplace.db.session import engine as app_engine
from marketplace.db.session import get_db
from marketplace.main import app
from marketplace.models.bid import Bid
from marketplace.models.category import Category
from marketplace.models.listing import Listing
from marketplace.models.offer import Offer
from marketplace.models.requirement import Requirement
from marketplace.realtime.manager import room_manager


@pytest.fixture(scope="session", autouse=True)
def enable_testing_mode():
    original = settings.testing
    settings.testing = True
    yield
    settings.testing = original


@pytest.fixture(scope="session", autouse=True)
def setup_test_schema():
    Base.metadata.drop_all(bind=app_engine)
    Base.metadata.create_all(bind=app_engine)
    yield
    Base.metadata.drop_all(bind=app_engine)


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=app_engine)
    Base.metadata.create_all(bind=app_engine)
    yield


@pytest.fixture(autouse=True)
def reset_rooms():
    room_manager.reset()
    yield
    room_manager.reset()


@pytest.fixture
def db_session():
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=app_engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_session):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=app_engine)
    db_session_lock = threading.Lock()

    def override_get_db():
        if db_session_lock.acquire(blocking=False):
            try:
                yield db_session
            finally:
                db_session_lock.release()
            return

        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(role: str, sub: str) -> dict[str, str]:
        token = issue_jwt({"sub": sub, "role": role}, settings.jwt_secret)
        return {"Authorization": f"Bearer {token}"}

    return {
        "admin": _headers("ADMIN", "admin-1"),
        "super_admin": _headers("SUPER_ADMIN", "root-1"),
        "buyer": _headers("BUYER", "buyer-1"),
        "seller": _headers("SELLER", "seller-1"),
    }


@pytest.fixture
def offer(db_session) -> Offer:
    category = Category(name="Cement")
    db_session.add(category)
    db_session.flush()
    requirement = Requirement(
        buyer_id="buyer-1", title="OPC 53 grade", category_id=category.id, quantity=100
    )
    db_session.add(requirement)
    db_session.flush()
    row = Offer(requirement_id=requirement.id, offer_user_id="seller-1", price=350, quantity=100)
    db_session.add(row)
    db_session.commit()
    return row


@pytest.fixture
def bid(db_session) -> Bid:
    category = Category(name="Steel")
    db_session.add(category)
    db_session.flush()
    listing = Listing(seller_id="seller-1", title="TMT bars", category_id=category.id, quantity=20)
    db_session.add(listing)
    db_session.flush()
    row = Bid(listing_id=listing.id, bidder_id="buyer-1", amount=52000)
    db_session.add(row)
    db_session.commit()
    return row
