"""Typed errors raised by the carrier itself.

Errors raised by application actions are never converted into these types;
they propagate through `run_with_context` untouched.
"""

from __future__ import annotations

import re
from typing import Any


_ERROR_CODE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")


class FirstAppError(Exception):
    """Base typed error for firstapp.

    - Stable `code` for programmatic handling.
    - Human-readable `message`.
    - Optional `meta` payload for debugging.
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not _ERROR_CODE_RE.fullmatch(code):
            raise ValueError(
                "Invalid firstapp error code. Expected dot-separated lowercase tokens, "
                f"got: {code!r}"
            )
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = dict(meta or {})

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "detail": self.message}
        if self.meta:
            payload["meta"] = self.meta
        return payload


class ContextNotSetError(FirstAppError):
    def __init__(
        self,
        *,
        message: str = "No environment is set. Run the action via run_with_context().",
        code: str = "context.not_set",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)


class EnvValidationError(FirstAppError):
    def __init__(
        self,
        *,
        message: str = "Invalid environment",
        code: str = "env.invalid",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)
