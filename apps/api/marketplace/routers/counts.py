from collections.abc import Callable

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.auth.dependencies import require_admin
from marketplace.db.session import get_session_factory
from marketplace.schemas.counts import MasterCountsResponse
from marketplace.services.counts_service import get_master_counts

router = APIRouter(
    prefix="/admin/counts",
    tags=["admin-counts"],
    dependencies=[Depends(require_admin)],
)


@router.get("/masters", response_model=MasterCountsResponse, summary="Master data counts")
def master_counts_endpoint(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> MasterCountsResponse:
    return MasterCountsResponse.model_validate(get_master_counts(session_factory))
