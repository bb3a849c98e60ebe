from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FakeDb:
    """In-memory stand-in for `Env.db_handle`."""

    name: str = "fake"
    rows: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        return self.rows.get(key)

    def put(self, key: str, value: Any) -> None:
        self.rows[key] = value
