"""
Database engine helpers

Uses SQLAlchemy 2.0. The engine created here is what start-up code hands to
`Env` as its `db_handle`; nothing in this module owns a schema.
"""

from contextlib import contextmanager
from typing import Iterator

import structlog
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from firstapp.appm import get_db
from firstapp.config import Settings, get_settings

logger = structlog.get_logger()


def init_db(settings: Settings | None = None) -> Engine:
    """Create the engine described by `settings`."""
    settings = settings or get_settings()
    database_url = settings.database_url

    engine_kwargs: dict[str, object] = {
        "echo": settings.log_level == "DEBUG",
    }
    if settings.db_pool_mode == "null":
        engine_kwargs["poolclass"] = NullPool
    elif not database_url.startswith("sqlite"):
        # QueuePool-backed defaults for long-running workloads.
        engine_kwargs["pool_size"] = max(1, int(settings.db_pool_size))
        engine_kwargs["max_overflow"] = max(0, int(settings.db_pool_max_overflow))
        engine_kwargs["pool_timeout"] = max(1, int(settings.db_pool_timeout_seconds))
        engine_kwargs["pool_recycle"] = max(60, int(settings.db_pool_recycle_seconds))
        engine_kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **engine_kwargs)

    logger.info(
        "Database engine initialized",
        url=database_url[:50] + ("..." if len(database_url) > 50 else ""),
        pool_mode=settings.db_pool_mode,
    )
    return engine


def close_db(engine: Engine) -> None:
    """Dispose of the engine's connection pool."""
    engine.dispose()
    logger.info("Database engine closed")


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """
    Get a database session bound to `engine`.

    Commits on success; rolls back and re-raises on error.

    Usage:
        with session_scope(engine) as session:
            session.execute(...)
    """
    session = sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def current_session() -> Iterator[Session]:
    """Session on the current environment's database handle."""
    with session_scope(get_db()) as session:
        yield session
