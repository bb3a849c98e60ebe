"""firstapp: an immutable application environment carried implicitly through calls."""

from firstapp.appm import (
    Env,
    LogFn,
    arun_with_context,
    ask,
    asks,
    current_env_or_none,
    env_scope,
    get_config,
    get_db,
    get_env,
    local,
    log,
    propagate,
    run_with_context,
)

__all__ = [
    "Env",
    "LogFn",
    "run_with_context",
    "arun_with_context",
    "env_scope",
    "local",
    "propagate",
    "ask",
    "get_env",
    "asks",
    "current_env_or_none",
    "get_config",
    "get_db",
    "log",
]
