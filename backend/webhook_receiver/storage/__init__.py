from webhook_receiver.storage.base import StorageClient, create_storage_client
from webhook_receiver.storage.rest import RestStorageClient
from webhook_receiver.storage.sql import SqlStorageClient

__all__ = [
    "StorageClient",
    "RestStorageClient",
    "SqlStorageClient",
    "create_storage_client",
]
