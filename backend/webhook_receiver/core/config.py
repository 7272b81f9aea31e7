from functools import lru_cache
from typing import NamedTuple

from pydantic_settings import BaseSettings

from webhook_receiver.core.errors import ConfigurationError

MISSING_CREDENTIALS_MESSAGE = "Variáveis de ambiente do Supabase não configuradas."


class StorageCredentials(NamedTuple):
    url: str
    key: str


class Settings(BaseSettings):
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    database_url: str | None = None
    webhooks_table: str = "webhooks"
    storage_timeout: float = 10.0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "extra": "ignore"}

    def storage_credentials(self) -> StorageCredentials:
        """Return the storage endpoint and secret, or fail if either is unset."""
        if not self.supabase_url or not self.supabase_service_role_key:
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)
        return StorageCredentials(self.supabase_url, self.supabase_service_role_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def migration_database_url(settings: Settings) -> str:
    """URL used by migrations and table setup scripts.

    ``DATABASE_URL`` wins; otherwise the storage endpoint is used when it
    is itself a database URL.
    """
    if settings.database_url:
        return settings.database_url
    url = settings.supabase_url or ""
    if url and not url.lower().startswith(("http://", "https://")):
        return url
    raise ConfigurationError("DATABASE_URL is not configured.")
