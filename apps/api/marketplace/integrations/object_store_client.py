import asyncio
from typing import Protocol
from urllib.parse import quote

import httpx

from marketplace.config import settings
from marketplace.integrations.errors import (
    OBJECT_STORE,
    IntegrationRejectedError,
    IntegrationTimeoutError,
    IntegrationUnavailableError,
)

ORIGINAL_NAME_HEADER = "x-amz-meta-original-name"


class ObjectStore(Protocol):
    async def put_object(
        self, key: str, body: bytes, content_type: str, original_name: str
    ) -> None: ...

    async def delete_object(self, key: str) -> None: ...

    def public_url(self, key: str) -> str: ...


class ObjectStoreClient:
    """Path-style blob store client: objects live at <endpoint>/<bucket>/<key>."""

    def __init__(
        self,
        endpoint: str,
        bucket: str,
        timeout_s: float,
        max_retries: int,
        backoff_s: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.bucket = bucket.strip("/")
        self.timeout_s = timeout_s
        self.max_retries = max_retries
        self.backoff_s = backoff_s
        self._transport = transport

    def public_url(self, key: str) -> str:
        return f"{self.endpoint}/{self.bucket}/{quote(key)}"

    async def put_object(
        self, key: str, body: bytes, content_type: str, original_name: str
    ) -> None:
        headers = {
            "Content-Type": content_type,
            ORIGINAL_NAME_HEADER: quote(original_name),
        }
        await self._send("PUT", key, content=body, headers=headers)

    async def delete_object(self, key: str) -> None:
        await self._send("DELETE", key, missing_ok=True)

    async def _send(
        self,
        method: str,
        key: str,
        *,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        missing_ok: bool = False,
    ) -> None:
        if not self.endpoint or not self.bucket:
            raise IntegrationUnavailableError(OBJECT_STORE, "Object store is not configured")

        url = self.public_url(key)
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout_s, transport=self._transport
                ) as client:
                    response = await client.request(method, url, content=content, headers=headers)

                if response.status_code == 404 and missing_ok:
                    return None
                if response.status_code >= 500:
                    raise IntegrationUnavailableError(
                        OBJECT_STORE,
                        f"Object store returned {response.status_code} for {method}",
                        upstream_status=response.status_code,
                    )
                if response.status_code >= 400:
                    raise IntegrationRejectedError(
                        OBJECT_STORE,
                        f"Object store returned {response.status_code} for {method}",
                        upstream_status=response.status_code,
                    )
                return None
            except httpx.TimeoutException:
                integration_error = IntegrationTimeoutError(OBJECT_STORE)
            except httpx.TransportError as err:
                integration_error = IntegrationUnavailableError(OBJECT_STORE, str(err))
            except IntegrationUnavailableError as err:
                integration_error = err

            if attempt >= self.max_retries:
                raise integration_error
            await asyncio.sleep(self.backoff_s * (2**attempt))

        return None


def get_object_store() -> ObjectStore:
    return ObjectStoreClient(
        endpoint=settings.object_store_endpoint,
        bucket=settings.object_store_bucket,
        timeout_s=settings.object_store_timeout_s,
        max_retries=settings.object_store_max_retries,
        backoff_s=settings.object_store_backoff_s,
    )
