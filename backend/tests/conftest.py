import itertools
import os
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before the app reads them
os.environ.update(
    {
        "SUPABASE_URL": "https://test-project.supabase.co",
        "SUPABASE_SERVICE_ROLE_KEY": "service_role_test",
    }
)

from webhook_receiver.core.config import Settings, StorageCredentials, get_settings
from webhook_receiver.core.errors import StorageError
from webhook_receiver.main import app, get_storage_factory
from webhook_receiver.storage.base import StorageClient

SUPABASE_URL = "https://test-project.supabase.co"
SERVICE_KEY = "service_role_test"


class FakeStorageClient(StorageClient):
    """In-memory storage recording every insert call."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []
        self.rows: list[dict[str, Any]] = []
        self.closed = 0
        self._ids = itertools.count(1)

    async def insert(self, table: str, rows: list[dict[str, Any]]) -> dict[str, Any]:
        self.calls.append((table, rows))
        if self.error is not None:
            raise self.error
        row = {"id": next(self._ids), **rows[0]}
        self.rows.append(row)
        return row

    async def aclose(self) -> None:
        self.closed += 1


class FakeStorageFactory:
    def __init__(self, storage: FakeStorageClient):
        self.storage = storage
        self.credentials: list[StorageCredentials] = []

    def __call__(self, credentials: StorageCredentials, settings: Settings):
        self.credentials.append(credentials)
        return self.storage


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        supabase_url=SUPABASE_URL,
        supabase_service_role_key=SERVICE_KEY,
    )


@pytest.fixture
def storage() -> FakeStorageClient:
    return FakeStorageClient()


@pytest.fixture
def storage_factory(storage: FakeStorageClient) -> FakeStorageFactory:
    return FakeStorageFactory(storage)


@pytest.fixture
def client(settings: Settings, storage_factory: FakeStorageFactory) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_storage_factory] = lambda: storage_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def purchase_payload() -> dict:
    return {
        "event_type": "purchase.approved",
        "customer": {"name": "Ana", "email": "a@b.com"},
        "product": {"id": 7, "name": "Curso"},
        "amount": 97.5,
    }


@pytest.fixture
def failing_storage() -> FakeStorageClient:
    return FakeStorageClient(
        error=StorageError(
            'duplicate key value violates unique constraint "webhooks_pkey"',
            code="23505",
        )
    )
