import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from webhook_receiver.core.config import Settings, get_settings
from webhook_receiver.core.logging import configure_logging
from webhook_receiver.services.webhook import (
    METHOD_NOT_ALLOWED,
    StorageFactory,
    WebhookHandler,
)
from webhook_receiver.storage.base import create_storage_client

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Webhook receiver ready, writing to table {settings.webhooks_table}")
    yield


app = FastAPI(
    title="Webhook Receiver",
    description="Records provider webhooks into the webhooks table",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # Methods outside ALL_METHODS are refused by the router before the handler runs
    if exc.status_code == 405:
        return Response(METHOD_NOT_ALLOWED, status_code=405)
    return await http_exception_handler(request, exc)


# ---------- dependencies ----------
def get_storage_factory() -> StorageFactory:
    return create_storage_client


def get_webhook_handler(
    settings: Settings = Depends(get_settings),
    storage_factory: StorageFactory = Depends(get_storage_factory),
) -> WebhookHandler:
    return WebhookHandler(settings, storage_factory)


# ---------- ingress ----------
@app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def receive_webhook(
    path: str,
    request: Request,
    handler: WebhookHandler = Depends(get_webhook_handler),
) -> Response:
    return await handler.handle(request)


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "webhook_receiver.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
