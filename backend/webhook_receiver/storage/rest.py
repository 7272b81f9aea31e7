import logging
from typing import Any

import httpx

from webhook_receiver.core.errors import StorageError
from webhook_receiver.storage.base import StorageClient

logger = logging.getLogger(__name__)


class RestStorageClient(StorageClient):
    """Client for a PostgREST endpoint such as the Supabase REST API."""

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/rest/v1",
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def insert(self, table: str, rows: list[dict[str, Any]]) -> dict[str, Any]:
        try:
            r = await self._client.post(
                f"/{table}",
                json=rows,
                headers={
                    "Prefer": "return=representation",
                    "Accept": "application/vnd.pgrst.object+json",
                },
            )
        except httpx.HTTPError as exc:
            logger.error(f"Request to {self.base_url} failed: {exc}")
            raise StorageError(str(exc) or exc.__class__.__name__) from exc

        if not r.is_success:
            raise _error_from_response(r)

        try:
            row = r.json()
        except ValueError as exc:
            raise StorageError(f"Invalid response from storage: {r.text}") from exc
        if isinstance(row, list):
            if len(row) != 1:
                raise StorageError(
                    f"Expected a single inserted row, got {len(row)}", code="PGRST116"
                )
            row = row[0]
        return row

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_from_response(r: httpx.Response) -> StorageError:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return StorageError(
            body["message"], code=body.get("code"), details=body.get("details")
        )
    return StorageError(r.text or f"HTTP {r.status_code} {r.reason_phrase}")
