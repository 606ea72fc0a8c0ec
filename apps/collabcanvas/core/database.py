"""Database engine and session helpers (SQLModel-compatible)."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import Session, SQLModel

from collabcanvas.core.exceptions import ConfigurationError
from collabcanvas.core.settings import settings


def normalize_db_url(url: str) -> str:
    """Normalize database URL for SQLAlchemy.

    - Force explicit psycopg driver for Postgres URLs
    - Leave other schemes untouched
    """
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://") :]
    if url.startswith("postgresql://") and "+" not in url.split(":", 1)[0]:
        return "postgresql+psycopg://" + url[len("postgresql://") :]
    return url


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs: Any) -> Engine:
    """Build an engine for `url`, enabling FK enforcement on SQLite."""
    url = normalize_db_url(url)
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    try:
        engine = create_engine(url, **kwargs)
    except ModuleNotFoundError as exc:  # pragma: no cover - runtime dependency hint
        if url.startswith("postgres"):
            raise ConfigurationError(
                'PostgreSQL driver missing. Run: pip install "psycopg[binary]" '
                "or use SQLite locally: DATABASE_URL=sqlite:///apps/collabcanvas/collabcanvas.db",
            ) from exc
        raise
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


DB_URL = normalize_db_url(settings.database_url)

engine = create_db_engine(DB_URL, echo=settings.db_echo)
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    class_=Session,
)


def create_db_and_tables(bind: Engine | None = None) -> None:
    """Create any missing tables (dev bootstrap; migrations own production schemas)."""
    import collabcanvas.models  # noqa: F401 - register tables on SQLModel.metadata

    SQLModel.metadata.create_all(bind or engine)


def get_session() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy session scoped to the request lifecycle."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


__all__ = [
    "SessionLocal",
    "create_db_and_tables",
    "create_db_engine",
    "engine",
    "get_session",
    "normalize_db_url",
]
