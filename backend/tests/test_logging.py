import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeStorageClient, FakeStorageFactory
from webhook_receiver.core.logging import LOG_FORMAT, configure_logging
from webhook_receiver.main import app, get_webhook_handler
from webhook_receiver.services.webhook import WebhookHandler


@pytest.fixture
def logger():
    return MagicMock(spec=logging.Logger)


def _post(settings, storage, logger, payload):
    handler = WebhookHandler(settings, FakeStorageFactory(storage), logger=logger)
    app.dependency_overrides[get_webhook_handler] = lambda: handler
    try:
        return TestClient(app).post("/", json=payload)
    finally:
        app.dependency_overrides.clear()


def test_success_is_logged(settings, logger, purchase_payload):
    response = _post(settings, FakeStorageClient(), logger, purchase_payload)

    assert response.status_code == 200
    messages = [c.args[0] for c in logger.info.call_args_list]
    assert messages[0].startswith("Webhook received:")
    assert "purchase.approved" in messages[0]
    assert messages[1].startswith("Webhook stored:")
    logger.error.assert_not_called()


def test_failure_is_logged(settings, logger, failing_storage):
    response = _post(settings, failing_storage, logger, {"event_type": "x"})

    assert response.status_code == 500
    messages = [c.args[0] for c in logger.error.call_args_list]
    assert messages[0].startswith("Storage insert failed:")
    assert messages[1].startswith("Webhook processing failed: Erro no banco de dados")


def test_configure_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == LOG_FORMAT
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
