from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool


def database_url(url: str, password: str | None = None) -> URL:
    """Parse ``url``, filling in ``password`` when the URL has none."""
    parsed = make_url(url)
    if password and parsed.password is None and parsed.username:
        parsed = parsed.set(password=password)
    return parsed


def make_engine(url: str | URL) -> Engine:
    # No pool: every request owns its connection and releases it on close.
    return create_engine(url, future=True, poolclass=NullPool)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
