from abc import ABC, abstractmethod
from typing import Any

from webhook_receiver.core.config import Settings, StorageCredentials


class StorageClient(ABC):
    """Inserts rows into a named table and returns the inserted row."""

    @abstractmethod
    async def insert(self, table: str, rows: list[dict[str, Any]]) -> dict[str, Any]:
        """Insert ``rows`` and return the single resulting row.

        Raises:
            StorageError: the storage layer rejected the insert or could
                not be reached.
        """

    async def aclose(self) -> None:
        return None


def create_storage_client(
    credentials: StorageCredentials, settings: Settings
) -> StorageClient:
    """Build a client for ``credentials.url``.

    HTTP(S) endpoints are spoken to over the REST interface; anything else
    is treated as a SQLAlchemy database URL.
    """
    from webhook_receiver.storage.rest import RestStorageClient
    from webhook_receiver.storage.sql import SqlStorageClient

    scheme = credentials.url.split("://", 1)[0].lower()
    if scheme in ("http", "https"):
        return RestStorageClient(
            credentials.url, credentials.key, timeout=settings.storage_timeout
        )
    return SqlStorageClient(credentials.url, credentials.key)
