"""In-memory stand-in for a watchdog observer."""

from __future__ import annotations

from typing import Any


class FakeObserver:
    """Records scheduling calls instead of watching the file system."""

    instances: list[FakeObserver] = []

    def __init__(self, *, fail: bool = False) -> None:
        self.daemon = False
        self.scheduled: list[tuple[Any, str, bool]] = []
        self.alive = False
        self.joined = False
        self._fail = fail
        FakeObserver.instances.append(self)

    def schedule(self, handler: Any, path: str, recursive: bool = False) -> None:
        if self._fail:
            msg = "inotify watch limit reached"
            raise OSError(msg)
        self.scheduled.append((handler, path, recursive))

    def start(self) -> None:
        self.alive = True

    def stop(self) -> None:
        self.alive = False

    def join(self, timeout: float | None = None) -> None:
        self.joined = True

    def is_alive(self) -> bool:
        return self.alive
