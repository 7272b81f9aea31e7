import logging
from typing import Any

import sqlalchemy.exc
from starlette.concurrency import run_in_threadpool

from webhook_receiver.core.errors import StorageError
from webhook_receiver.db.models import WebhookEntry
from webhook_receiver.db.session import database_url, make_engine, make_session_factory
from webhook_receiver.storage.base import StorageClient

logger = logging.getLogger(__name__)


class SqlStorageClient(StorageClient):
    """Writes directly to the webhooks table through SQLAlchemy."""

    def __init__(self, url: str, key: str | None = None):
        try:
            self.engine = make_engine(database_url(url, password=key))
        except (sqlalchemy.exc.ArgumentError, ImportError) as exc:
            raise StorageError(str(exc)) from exc
        self.SessionLocal = make_session_factory(self.engine)

    async def insert(self, table: str, rows: list[dict[str, Any]]) -> dict[str, Any]:
        if table != WebhookEntry.__tablename__:
            raise StorageError(f'relation "{table}" does not exist', code="42P01")
        return await run_in_threadpool(self._insert, rows)

    def _insert(self, rows: list[dict[str, Any]]) -> dict[str, Any]:
        db = self.SessionLocal()
        try:
            entries = [WebhookEntry(**row) for row in rows]
            db.add_all(entries)
            db.commit()
            for entry in entries:
                db.refresh(entry)
        except (sqlalchemy.exc.SQLAlchemyError, sqlalchemy.exc.DBAPIError) as exc:
            db.rollback()
            logger.error(f"Database error: {exc}")
            orig = getattr(exc, "orig", None)
            raise StorageError(str(orig or exc), code=getattr(exc, "code", None)) from exc
        finally:
            db.close()

        if len(entries) != 1:
            raise StorageError(
                f"Expected a single inserted row, got {len(entries)}", code="PGRST116"
            )
        return entries[0].to_dict()

    async def aclose(self) -> None:
        self.engine.dispose()
