#!/usr/bin/env python
"""
Create the webhooks table without running migrations (local SQL backends).

Usage:
    DATABASE_URL=sqlite:///./webhooks.db python scripts/create_tables.py
"""
from webhook_receiver.core.config import get_settings, migration_database_url
from webhook_receiver.db.models import Base
from webhook_receiver.db.session import database_url, make_engine


def main() -> None:
    settings = get_settings()
    url = database_url(
        migration_database_url(settings), password=settings.supabase_service_role_key
    )
    engine = make_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()
    print("=== Tables Created ===")
    for table in Base.metadata.sorted_tables:
        print(f"Table       : {table.name}")
    print(f"Database    : {url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
