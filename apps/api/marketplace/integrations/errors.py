from dataclasses import dataclass

OBJECT_STORE = "object_store"


@dataclass
class IntegrationError(Exception):
    service: str
    code: str
    message: str
    retryable: bool = False
    upstream_status: int | None = None

    def __str__(self) -> str:
        if self.upstream_status is None:
            return f"{self.service}:{self.code}:{self.message}"
        return f"{self.service}:{self.code}:{self.upstream_status}:{self.message}"


class IntegrationTimeoutError(IntegrationError):
    def __init__(self, service: str, message: str = "Upstream timeout") -> None:
        super().__init__(service=service, code="TIMEOUT", message=message, retryable=True)


class IntegrationUnavailableError(IntegrationError):
    def __init__(
        self,
        service: str,
        message: str = "Upstream unavailable",
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(
            service=service,
            code="UNAVAILABLE",
            message=message,
            retryable=True,
            upstream_status=upstream_status,
        )


class IntegrationRejectedError(IntegrationError):
    """The upstream answered with a 4xx; retrying the same request will not help."""

    def __init__(
        self,
        service: str,
        message: str = "Upstream rejected the request",
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(
            service=service,
            code="REJECTED",
            message=message,
            retryable=False,
            upstream_status=upstream_status,
        )
