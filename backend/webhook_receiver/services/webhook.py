"""Inbound webhook handling.

One accepted request produces exactly one insert of a single-row batch
and one response:

- non-POST: 405 with a plain-text body, nothing parsed or stored
- stored: 200 ``{"success": true, "message": "Webhook processado", "entryId": ...}``
- any failure: 500 ``{"success": false, "message": ...}``

There is no deduplication and no retry; a sender that receives a 500
is expected to resend the whole request.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from webhook_receiver.core.config import Settings, StorageCredentials
from webhook_receiver.core.errors import (
    PayloadParseError,
    StorageError,
    StorageWriteError,
    status_for,
)
from webhook_receiver.schemas.ingest import WebhookAck, WebhookFailure, WebhookRecord
from webhook_receiver.storage.base import StorageClient, create_storage_client

METHOD_NOT_ALLOWED = "Método não permitido"

StorageFactory = Callable[[StorageCredentials, Settings], StorageClient]


class WebhookHandler:
    def __init__(
        self,
        settings: Settings,
        storage_factory: StorageFactory = create_storage_client,
        logger: logging.Logger | None = None,
    ):
        self.settings = settings
        self.storage_factory = storage_factory
        self.logger = logger or logging.getLogger(__name__)

    async def handle(self, request: Request) -> Response:
        if request.method != "POST":
            return Response(METHOD_NOT_ALLOWED, status_code=405)

        try:
            payload = await self.parse_body(request)
            ack = await self.process(payload)
        except Exception as exc:
            self.logger.error(f"Webhook processing failed: {exc}")
            failure = WebhookFailure(message=str(exc))
            return JSONResponse(failure.model_dump(), status_code=status_for(exc))

        return JSONResponse(ack.model_dump(), status_code=200)

    async def parse_body(self, request: Request) -> Any:
        raw = await request.body()
        try:
            return json.loads(raw)
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError both land here
            raise PayloadParseError(str(exc)) from exc

    async def process(self, payload: Any) -> WebhookAck:
        """Store ``payload`` as a webhook record and acknowledge it."""
        self.logger.info(f"Webhook received: {payload!r}")

        credentials = self.settings.storage_credentials()
        record = WebhookRecord.from_payload(payload)

        try:
            client = self.storage_factory(credentials, self.settings)
            try:
                row = await client.insert(
                    self.settings.webhooks_table, [record.as_row()]
                )
            finally:
                await client.aclose()
        except StorageError as exc:
            self.logger.error(f"Storage insert failed: {exc!r}")
            raise StorageWriteError(exc.message) from exc

        self.logger.info(f"Webhook stored: {row!r}")
        return WebhookAck(entryId=row.get("id"))
