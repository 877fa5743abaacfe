from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ignores ON DELETE actions unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if database_url in {"sqlite://", "sqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        db_engine = create_engine(database_url, **kwargs)
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)
        return db_engine
    return create_engine(database_url, pool_pre_ping=True)


engine = create_db_engine(settings.database_url)


def init_db(db_engine: Engine | None = None) -> None:
    # Register every table on the metadata before create_all.
    import app.models  # noqa: F401

    target = db_engine or engine
    SQLModel.metadata.create_all(target)
    logger.info("db.init tables=%s", len(SQLModel.metadata.tables))


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
