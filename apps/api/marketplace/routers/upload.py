import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi import status as http_status

from marketplace.auth.dependencies import AuthContext, get_auth_context
from marketplace.config import settings
from marketplace.errors import UpstreamError
from marketplace.integrations.errors import IntegrationError
from marketplace.integrations.object_store_client import ObjectStore, get_object_store
from marketplace.observability import log_event
from marketplace.schemas.common import MessageResponse
from marketplace.schemas.upload import UploadFileResponse
from marketplace.services.upload_service import (
    IncomingFile,
    delete_file,
    upload_file,
    upload_files,
)

router = APIRouter(prefix="/upload", tags=["upload"])


async def _incoming(upload: UploadFile) -> IncomingFile:
    # One byte past the cap is enough for validate_file to reject the file.
    return IncomingFile(
        filename=upload.filename,
        content_type=upload.content_type,
        content=await upload.read(settings.upload_max_file_size_bytes + 1),
    )


def _translate_integration_error(err: IntegrationError, message: str) -> UpstreamError:
    log_event(
        "object_store_failed",
        entity="upload",
        detail={"service": err.service, "code": err.code, "upstream_status": err.upstream_status},
        level=logging.WARNING,
    )
    return UpstreamError(message)


@router.post(
    "/single",
    response_model=UploadFileResponse,
    status_code=http_status.HTTP_201_CREATED,
    summary="Upload one file",
)
async def upload_single_endpoint(
    file: UploadFile | None = File(default=None),
    store: ObjectStore = Depends(get_object_store),
) -> UploadFileResponse:
    incoming = await _incoming(file) if file is not None else None
    try:
        uploaded = await upload_file(store, incoming)
    except IntegrationError as err:
        raise _translate_integration_error(err, "Failed to upload file") from err
    return UploadFileResponse.model_validate(uploaded)


@router.post(
    "/multiple",
    response_model=list[UploadFileResponse],
    status_code=http_status.HTTP_201_CREATED,
    summary="Upload up to five files",
)
async def upload_multiple_endpoint(
    files: list[UploadFile] | None = File(default=None),
    store: ObjectStore = Depends(get_object_store),
    _auth: AuthContext = Depends(get_auth_context),
) -> list[UploadFileResponse]:
    incoming = [await _incoming(upload) for upload in files or []]
    try:
        uploaded = await upload_files(store, incoming)
    except IntegrationError as err:
        raise _translate_integration_error(err, "Failed to upload file") from err
    return [UploadFileResponse.model_validate(item) for item in uploaded]


@router.delete("/{filename}", response_model=MessageResponse, summary="Delete an uploaded file")
async def delete_file_endpoint(
    filename: str,
    store: ObjectStore = Depends(get_object_store),
    _auth: AuthContext = Depends(get_auth_context),
) -> MessageResponse:
    try:
        await delete_file(store, filename)
    except IntegrationError as err:
        raise _translate_integration_error(err, "Failed to delete file") from err
    return MessageResponse(message="File deleted successfully")
