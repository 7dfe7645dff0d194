"""Supabase Storage blob store (REST API over httpx).

Objects are written with the service role key into a public bucket:

    POST   {supabase_url}/storage/v1/object/{bucket}/{key}
    DELETE {supabase_url}/storage/v1/object/{bucket}/{key}
    public URL: {supabase_url}/storage/v1/object/public/{bucket}/{key}
"""

import asyncio
from pathlib import Path

import httpx
import structlog

from core.exceptions import StorageError

logger = structlog.get_logger()


class SupabaseBlobStorage:
    """IBlobStorage implementation backed by a Supabase Storage bucket."""

    def __init__(
        self,
        supabase_url: str,
        service_key: str,
        bucket: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = supabase_url.rstrip("/")
        self._service_key = service_key
        self._bucket = bucket
        self._timeout = timeout
        self._transport = transport

    @property
    def public_prefix(self) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._bucket}/"

    async def store(self, source: Path, key: str, content_type: str) -> str:
        """Upload ``source`` under ``key`` and return the public URL."""
        data = await asyncio.to_thread(source.read_bytes)
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        await self._request("POST", key, content=data, headers=headers)
        logger.info("blob_stored", bucket=self._bucket, key=key, size_bytes=len(data))
        return f"{self.public_prefix}{key}"

    async def delete(self, url: str) -> None:
        """Delete the object behind a public URL. A missing object is not an error."""
        if not url.startswith(self.public_prefix):
            raise StorageError("Asset URL is not managed by this store", details={"url": url})

        key = url[len(self.public_prefix) :]
        response = await self._request("DELETE", key, allow_missing=True)
        if response.status_code == 404:
            logger.warning("blob_already_missing", url=url)

    async def _request(
        self,
        method: str,
        key: str,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        allow_missing: bool = False,
    ) -> httpx.Response:
        url = f"{self._base_url}/storage/v1/object/{self._bucket}/{key}"
        headers = {
            "Authorization": f"Bearer {self._service_key}",
            "apikey": self._service_key,
            **(headers or {}),
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, content=content, headers=headers)
        except httpx.HTTPError as e:
            logger.error("blob_request_failed", method=method, key=key, error=str(e))
            raise StorageError(
                "Asset storage is unavailable", details={"key": key}
            ) from e

        if response.is_success or (allow_missing and response.status_code == 404):
            return response

        logger.error(
            "blob_request_rejected",
            method=method,
            key=key,
            status_code=response.status_code,
            body=response.text[:500],
        )
        raise StorageError(
            "Asset storage rejected the request",
            details={"key": key, "status_code": response.status_code},
        )
