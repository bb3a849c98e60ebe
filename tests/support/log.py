from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RecordingLog:
    """
    Log function that appends every message to `messages`.

    Drop-in `Env.log_fn` for tests that assert on what was logged.
    """

    messages: list[str] = field(default_factory=list)

    def __call__(self, message: str) -> None:
        self.messages.append(message)
