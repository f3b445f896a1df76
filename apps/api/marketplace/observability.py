import json
import logging
from contextvars import ContextVar

_request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

LOGGER_NAME = "marketplace.api"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", _request_id_ctx.get()),
            "entity": getattr(record, "entity", None),
            "entity_id": getattr(record, "entity_id", None),
        }
        detail = getattr(record, "detail", None)
        if detail is not None:
            payload["detail"] = detail
        return json.dumps(payload, default=str)


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


def set_request_id(request_id: str) -> None:
    _request_id_ctx.set(request_id)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


def log_event(
    message: str,
    *,
    entity: str | None = None,
    entity_id: str | None = None,
    detail: dict | None = None,
    level: int = logging.INFO,
) -> None:
    logging.getLogger(LOGGER_NAME).log(
        level,
        message,
        extra={
            "request_id": get_request_id(),
            "entity": entity,
            "entity_id": entity_id,
            "detail": detail,
        },
    )
