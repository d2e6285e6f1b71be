from __future__ import annotations

import os
import signal
import threading
from typing import Any, Optional

import typer
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from tailsieve.errors import SourceReadError
from tailsieve.follow import FollowEngine

# our own reads show up as these on inotify; they never change the size
_IGNORED_EVENTS = {"opened", "closed_no_write"}


def _norm(path: Any) -> str:
    return os.path.realpath(os.fsdecode(path)) if path else ""


class ChangeHandler(FileSystemEventHandler):
    """
    Forwards every event touching the tailed file to the engine.

    The parent directory is watched, so a file that is rotated away and
    recreated keeps being followed.
    """

    def __init__(self, engine: FollowEngine) -> None:
        super().__init__()
        self.engine = engine
        self.target = _norm(engine.source.path)

    def concerns(self, event: FileSystemEvent) -> bool:
        if event.is_directory or event.event_type in _IGNORED_EVENTS:
            return False
        return self.target in (_norm(event.src_path), _norm(getattr(event, "dest_path", "")))

    def on_any_event(self, event: FileSystemEvent) -> None:
        if self.concerns(event):
            check(self.engine)


def check(engine: FollowEngine) -> int:
    """Run one follow cycle; errors are reported and the watch goes on."""
    try:
        return engine.on_change()
    except Exception as e:
        typer.echo(f"[tailsieve] ERROR    follow cycle skipped: {e!r}", err=True)
        return 0


def install_stop_signals(stop: threading.Event) -> None:
    """SIGTERM sets `stop` (main thread only). Ctrl+C is handled by the caller."""

    def _handler(signum: int, frame: Any) -> None:
        stop.set()

    signal.signal(signal.SIGTERM, _handler)


def watch(
    engine: FollowEngine,
    stop: threading.Event,
    polling: bool = False,
    poll_interval: float = 1.0,
    ready: Optional[threading.Event] = None,
) -> bool:
    """
    Follow engine.source until `stop` is set.

    Blocks the calling thread on `stop`; watchdog runs the handler on its
    own thread. Returns False if the watcher died on its own.
    """
    target = _norm(engine.source.path)
    observer = PollingObserver(timeout=poll_interval) if polling else Observer()
    try:
        observer.schedule(ChangeHandler(engine), os.path.dirname(target), recursive=False)
        observer.start()
    except OSError as e:
        raise SourceReadError(target, e) from e

    try:
        # anything appended between the initial tail and the observer start
        check(engine)
        if ready is not None:
            ready.set()

        while not stop.wait(timeout=1.0):
            if not observer.is_alive():
                typer.echo("[tailsieve] ERROR    file watcher stopped unexpectedly.", err=True)
                return False
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join(timeout=2)
    return True
