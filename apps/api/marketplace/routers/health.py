from collections.abc import Callable
from typing import Literal

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.db.session import get_session_factory
from marketplace.observability import log_event
from marketplace.schemas.health import HealthResponse, ReadinessDependency, ReadinessResponse

ReadinessStatus = Literal["ok", "error"]

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    summary="Readiness check",
    response_model=ReadinessResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
def readiness(
    response: Response,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> ReadinessResponse:
    database_status = _database_dependency_status(session_factory)
    dependencies = [ReadinessDependency(name="database", status=database_status)]

    readiness_status = "ok" if all(dep.status == "ok" for dep in dependencies) else "degraded"
    if readiness_status != "ok":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status=readiness_status, dependencies=dependencies)


def _database_dependency_status(
    session_factory: Callable[[], Session],
) -> ReadinessStatus:
    try:
        with session_factory() as db:
            db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        log_event(
            "readiness_dependency_check_failed",
            entity="database",
            detail={"error": type(exc).__name__},
        )
        return "error"
    return "ok"
