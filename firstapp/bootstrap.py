"""Start-up wiring: build the Env once per run and drive an action with it."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

import structlog

from firstapp.appm import Env, LogFn, run_with_context
from firstapp.config import Settings, get_settings
from firstapp.db.client import close_db, init_db
from firstapp.kernel.errors import EnvValidationError
from firstapp.log import configure_logging, structlog_log_fn

logger = structlog.get_logger()

T = TypeVar("T")


def build_env(
    settings: Settings | None = None,
    *,
    log_fn: LogFn | None = None,
    db_handle: Any = None,
) -> Env:
    """Assemble an Env from settings, creating any collaborator not supplied."""
    settings = settings or get_settings()
    if log_fn is None:
        log_fn = structlog_log_fn(app=settings.app_name)
    if db_handle is not None:
        return Env(log_fn=log_fn, config=settings, db_handle=db_handle)

    engine = init_db(settings)
    try:
        return Env(log_fn=log_fn, config=settings, db_handle=engine)
    except EnvValidationError:
        close_db(engine)
        raise


@contextmanager
def app_env(
    settings: Settings | None = None,
    *,
    log_fn: LogFn | None = None,
    db_handle: Any = None,
) -> Iterator[Env]:
    """Build the Env for one run and release what was created for it.

    An injected `db_handle` belongs to the caller and is not disposed.
    """
    settings = settings or get_settings()
    owns_db = db_handle is None
    env = build_env(settings, log_fn=log_fn, db_handle=db_handle)

    logger.info("Application environment ready", app=settings.app_name, environment=settings.environment)
    try:
        yield env
    finally:
        if owns_db:
            close_db(env.db_handle)
        logger.info("Application environment released", app=settings.app_name)


def run_app(
    action: Callable[[], T],
    settings: Settings | None = None,
    *,
    log_fn: LogFn | None = None,
    db_handle: Any = None,
) -> T:
    """Configure logging, build the Env and run `action` inside it."""
    settings = settings or get_settings()
    configure_logging(settings)
    with app_env(settings, log_fn=log_fn, db_handle=db_handle) as env:
        return run_with_context(env, action)
