"""File-system watcher for JSON resource files.

One JsonFileWatcher monitors one resource root (recursively) and notifies
subscribers with the full path of every ``*.json`` file that is modified,
created, or moved into place (editors often save via rename).

Watch failures never propagate: a root that cannot be watched degrades to
"no live invalidation" and a warning is logged. Subscriber failures are
logged with their traceback and do not stop the observer thread.

Python 3.13+. External dependency: watchdog.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

from jsonlocalization.constants import JSON_FILE_PATTERN

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

__all__ = ["ChangeCallback", "JsonFileWatcher"]

logger = logging.getLogger(__name__)

type ChangeCallback = Callable[[str], None]
"""Receives the full path of a changed JSON file."""

# Seconds to wait for the observer thread on close().
_JOIN_TIMEOUT: float = 5.0


class _JsonChangeHandler(PatternMatchingEventHandler):
    """Forwards JSON file events to the owning watcher."""

    def __init__(self, notify: ChangeCallback) -> None:
        super().__init__(patterns=[JSON_FILE_PATTERN], ignore_directories=True)
        self._notify = notify

    def on_modified(self, event: FileSystemEvent) -> None:
        self._notify(os.fsdecode(event.src_path))

    def on_created(self, event: FileSystemEvent) -> None:
        self._notify(os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        self._notify(os.fsdecode(event.dest_path))


class JsonFileWatcher:
    """Watches one directory tree for JSON file changes.

    Thread Safety:
        subscribe()/unsubscribe() may be called from any thread. Callbacks run
        on watchdog's observer thread and must be thread-safe themselves.

    Example:
        >>> watcher = JsonFileWatcher("Resources")
        >>> watcher.subscribe(lambda path: print(f"changed: {path}"))
        >>> watcher.start()
        >>> ...
        >>> watcher.close()

    Attributes:
        root: Directory being watched
    """

    __slots__ = (
        "_callbacks",
        "_closed",
        "_handler",
        "_lock",
        "_observer",
        "_observer_factory",
        "root",
    )

    def __init__(
        self,
        root: str | Path,
        *,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        """Initialize the watcher without starting it.

        Args:
            root: Directory to watch
            observer_factory: Creates the watchdog observer (swap in
                PollingObserver for network file systems)
        """
        self.root = Path(root)
        self._observer_factory = observer_factory
        self._observer: BaseObserver | None = None
        self._callbacks: list[ChangeCallback] = []
        self._lock = Lock()
        self._closed = False
        self._handler = _JsonChangeHandler(self._dispatch)

    @property
    def is_watching(self) -> bool:
        """Whether an observer is currently running for this root."""
        return self._observer is not None and self._observer.is_alive()

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback for changed file paths."""
        with self._lock:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Remove a previously registered callback (no-op if unknown)."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def start(self) -> bool:
        """Start watching.

        Returns:
            True if the OS watch is active, False if watching is unavailable
            for this root (missing directory, watch limit reached, ...)
        """
        with self._lock:
            if self._closed:
                msg = "Cannot start a closed JsonFileWatcher"
                raise RuntimeError(msg)
            if self._observer is not None:
                return True
            if not self.root.is_dir():
                logger.warning(
                    "Resource root %s does not exist; live reload disabled for it", self.root
                )
                return False

            observer = self._observer_factory()
            observer.daemon = True
            try:
                observer.schedule(self._handler, str(self.root), recursive=True)
                observer.start()
            except OSError as e:
                logger.warning(
                    "Cannot watch resource root %s: %s; live reload disabled", self.root, e
                )
                return False

            self._observer = observer
            logger.debug("Watching %s for JSON changes", self.root)
            return True

    def close(self) -> None:
        """Stop watching and release the OS watch handle. Idempotent."""
        with self._lock:
            observer, self._observer = self._observer, None
            self._closed = True
            self._callbacks.clear()
        if observer is not None:
            observer.stop()
            observer.join(timeout=_JOIN_TIMEOUT)
            logger.debug("Stopped watching %s", self.root)

    def _dispatch(self, path: str) -> None:
        with self._lock:
            callbacks = tuple(self._callbacks)
        for callback in callbacks:
            try:
                callback(path)
            except Exception:
                # Runs on the observer thread: an escaping exception would end live reload.
                logger.exception("Resource change callback failed for %s", path)

    def __enter__(self) -> JsonFileWatcher:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"JsonFileWatcher(root={str(self.root)!r}, watching={self.is_watching})"
