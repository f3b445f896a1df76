import asyncio
import posixpath
import uuid
from dataclasses import dataclass

from marketplace.config import MEBIBYTE, settings
from marketplace.errors import ValidationError
from marketplace.integrations.object_store_client import ObjectStore
from marketplace.observability import log_event

ALLOWED_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    }
)


@dataclass
class IncomingFile:
    filename: str | None
    content_type: str | None
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class UploadedFile:
    filename: str
    url: str
    size: int
    mimetype: str


def validate_file(file: IncomingFile | None) -> None:
    if file is None or not file.filename:
        raise ValidationError("No file provided")

    max_size = settings.upload_max_file_size_bytes
    if file.size > max_size:
        raise ValidationError(
            f"File size exceeds maximum allowed size of {max_size // MEBIBYTE}MB"
        )

    if file.content_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(f"File type {file.content_type} is not allowed")


def generate_filename(original_name: str) -> str:
    base = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    _, ext = posixpath.splitext(base)
    return f"{uuid.uuid4().hex}{ext.lower()}"


def object_key(filename: str) -> str:
    prefix = settings.object_store_prefix
    return f"{prefix}/{filename}" if prefix else filename


async def upload_file(store: ObjectStore, file: IncomingFile | None) -> UploadedFile:
    validate_file(file)

    filename = generate_filename(file.filename)
    key = object_key(filename)
    await store.put_object(key, file.content, file.content_type, file.filename)

    log_event(
        "file_uploaded",
        entity="upload",
        entity_id=filename,
        detail={"size": file.size, "mimetype": file.content_type},
    )
    return UploadedFile(
        filename=filename,
        url=store.public_url(key),
        size=file.size,
        mimetype=file.content_type,
    )


async def upload_files(store: ObjectStore, files: list[IncomingFile]) -> list[UploadedFile]:
    if not files:
        raise ValidationError("No files provided")

    max_files = settings.upload_max_files
    if len(files) > max_files:
        raise ValidationError(f"Maximum {max_files} files allowed per upload")

    # The first failure fails the whole call; uploads that already finished stay stored.
    return list(await asyncio.gather(*(upload_file(store, file) for file in files)))


async def delete_file(store: ObjectStore, filename: str) -> None:
    if not filename or "/" in filename or "\\" in filename or filename in {".", ".."}:
        raise ValidationError("Invalid filename")

    await store.delete_object(object_key(filename))
    log_event("file_deleted", entity="upload", entity_id=filename)
