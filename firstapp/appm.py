"""Application environment carrier.

Most application code needs the same start-up resources: configuration, a
database handle and somewhere to send log lines. Rather than adding an `env`
argument to every function in the call graph, or keeping those resources in
mutable globals, the environment is set once per run with
`run_with_context()` and read back anywhere below it with `ask()`:

    def handler() -> int:
        log("handling")
        return lookup(get_config().app_name)

    result = run_with_context(env, handler)

The current environment lives in a `ContextVar`, so it follows asyncio tasks
created inside a run and is isolated between concurrent runs. Threads started
from a plain executor do not copy context; wrap the callable with
`propagate()` first.

The carrier is transparent: whatever the action returns is returned, and
whatever it raises is raised, unchanged.
"""

from __future__ import annotations

import contextvars
import inspect
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator, TypeVar

from firstapp.kernel.errors import ContextNotSetError, EnvValidationError

T = TypeVar("T")
R = TypeVar("R")

LogFn = Callable[[str], None]


@dataclass(frozen=True, eq=False)
class Env:
    """Immutable bundle of the resources every contextual action may read.

    `config` and `db_handle` are opaque to the carrier. Any mutability inside
    `db_handle` (pooling, transactions) is the database layer's concern.
    """

    log_fn: LogFn
    config: Any
    db_handle: Any

    def __post_init__(self) -> None:
        if not callable(self.log_fn):
            raise EnvValidationError(
                message="Env.log_fn must be callable",
                meta={"field": "log_fn", "type": type(self.log_fn).__name__},
            )
        if self.config is None:
            raise EnvValidationError(message="Env.config is required", meta={"field": "config"})
        if self.db_handle is None:
            raise EnvValidationError(
                message="Env.db_handle is required", meta={"field": "db_handle"}
            )


_env_var: ContextVar[Env | None] = ContextVar("firstapp_env", default=None)


def _require_env(env: object) -> Env:
    if not isinstance(env, Env):
        raise EnvValidationError(
            message="Expected an Env instance",
            meta={"type": type(env).__name__},
        )
    return env


# =============================================================================
# RUNNERS
# =============================================================================


def run_with_context(env: Env, action: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run `action(*args, **kwargs)` with `env` as the current environment.

    The previous environment (if any) is restored when the action returns or
    raises. Coroutine functions are rejected; await them with
    `arun_with_context()` instead.
    """
    if inspect.iscoroutinefunction(action):
        raise EnvValidationError(
            message="Coroutine function passed to run_with_context(); use arun_with_context()",
            meta={"action": getattr(action, "__name__", repr(action))},
        )
    token = _env_var.set(_require_env(env))
    try:
        return action(*args, **kwargs)
    finally:
        _env_var.reset(token)


async def arun_with_context(
    env: Env,
    action: Callable[..., Awaitable[T]],
    *args: Any,
    **kwargs: Any,
) -> T:
    """Await `action(*args, **kwargs)` with `env` as the current environment.

    Tasks created inside the action inherit `env`.
    """
    token = _env_var.set(_require_env(env))
    try:
        return await action(*args, **kwargs)
    finally:
        _env_var.reset(token)


@contextmanager
def env_scope(env: Env) -> Iterator[Env]:
    """Context manager to set and restore the current environment."""
    token = _env_var.set(_require_env(env))
    try:
        yield env
    finally:
        _env_var.reset(token)


def local(modify: Callable[[Env], Env], action: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run `action` against a modified copy of the current environment.

    `modify` receives the current `Env` and must return an `Env`, typically
    via `dataclasses.replace`. The outer environment is current again once
    the action finishes.
    """
    return run_with_context(modify(ask()), action, *args, **kwargs)


def propagate(fn: Callable[..., T]) -> Callable[..., T]:
    """Bind `fn` to a snapshot of the current context.

    Use for thread pools, which do not copy context on submit:

        executor.submit(propagate(work), item)
    """
    ctx = contextvars.copy_context()

    def _run(*args: Any, **kwargs: Any) -> T:
        # A Context can only be entered by one thread at a time.
        return ctx.copy().run(fn, *args, **kwargs)

    return _run


# =============================================================================
# ACCESSORS
# =============================================================================


def ask() -> Env:
    """Return the current environment."""
    env = _env_var.get()
    if env is None:
        raise ContextNotSetError()
    return env


get_env = ask


def current_env_or_none() -> Env | None:
    """Return the current environment, or None outside any run."""
    return _env_var.get()


def asks(selector: Callable[[Env], R]) -> R:
    """Apply `selector` to the current environment."""
    return selector(ask())


def get_config() -> Any:
    return ask().config


def get_db() -> Any:
    return ask().db_handle


def log(message: str) -> None:
    """Send `message` to the current environment's log function."""
    ask().log_fn(message)
