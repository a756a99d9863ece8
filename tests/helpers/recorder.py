"""Callback factory that records invocation order."""

from __future__ import annotations

from collections.abc import Callable


class CallRecorder:
    """Hands out named callbacks and logs their calls in order."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def callback(self, name: str) -> Callable[[], None]:
        """Return a callback named ``name`` that records each call."""

        def record() -> None:
            self.calls.append(name)

        record.__name__ = name
        return record

    def count(self, name: str) -> int:
        """Number of times the callback called ``name`` ran."""
        return self.calls.count(name)
