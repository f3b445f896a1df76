from sqlalchemy.exc import OperationalError

from marketplace.db.session import get_session_factory
from marketplace.main import app


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_ready_reports_database_ok(client):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "dependencies": [{"name": "database", "status": "ok"}],
    }


class _BrokenSession:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, _statement):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_ready_degrades_when_database_is_down(client):
    app.dependency_overrides[get_session_factory] = lambda: _BrokenSession

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
