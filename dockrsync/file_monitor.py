import fnmatch
import os
import queue
import time
from collections.abc import Iterable, Iterator
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from dockrsync.utils.rich_console import get_console_logger

logger = get_console_logger()

DEFAULT_LATENCY = 0.1

# Checked against every path component below the watched root.
STATIC_IGNORE_PATTERNS = [
    ".*",
    ".idea",
    ".vscode",
    "*~",
    "*.swp",
    "*.swo",
    "*.swx",
    ".#*",
    "#*#",
    "4913",
    "*___jb_tmp___",
    "*___jb_old___",
]

_STOP = object()


class FileMonitorError(Exception):
    """Base exception for file monitor errors."""


class ChangeEventHandler(FileSystemEventHandler):
    """
    Queues the absolute paths touched by file system events.
    """

    def __init__(self, root_dir: str | Path, events: queue.Queue, ignore_patterns: Iterable[str] = STATIC_IGNORE_PATTERNS) -> None:
        """
        Initialize the event handler.
        Args:
            root_dir: Watched directory; ignore patterns apply to paths below it
            events: Queue receiving the changed paths
            ignore_patterns: Globs matched against each path component
        """
        super().__init__()
        self.root_dir = os.path.abspath(root_dir)
        self.events = events
        self.ignore_patterns = list(ignore_patterns)

    def _matches_ignore_pattern(self, file_path: str) -> bool:
        """Check if any component of a path matches an ignore pattern."""
        relative = os.path.relpath(file_path, self.root_dir)
        if relative == os.curdir:
            return False
        parts = Path(relative).parts
        return any(fnmatch.fnmatch(part, pattern) for part in parts for pattern in self.ignore_patterns)

    def _queue_path(self, file_path: str | bytes) -> None:
        file_path = os.fsdecode(file_path)
        if not file_path:
            return
        if self._matches_ignore_pattern(file_path):
            logger.debug(f"Ignoring change: {file_path}")
            return
        self.events.put(file_path)

    def on_any_event(self, event: FileSystemEvent) -> None:
        """
        Queue the source path, and the destination path of moves.
        Args:
            event: The file system event
        """
        if event.event_type in ("opened", "closed", "closed_no_write"):
            return
        # Parents get a modified event whenever a child changes; the child event covers it.
        if event.is_directory and event.event_type == "modified":
            return
        self._queue_path(event.src_path)
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            self._queue_path(dest_path)


class ChangeStream:
    """
    Recursively watches a directory and yields changed paths, coalescing bursts.

    Paths arriving within ``latency`` seconds of the first path of a batch are
    delivered together, once each, in first-seen order.
    """

    def __init__(self, root_dir: str | Path, latency: float = DEFAULT_LATENCY, ignore_patterns: Iterable[str] = STATIC_IGNORE_PATTERNS) -> None:
        self.root_dir = Path(root_dir).resolve()
        if not self.root_dir.is_dir():
            raise FileMonitorError(f"Watch path does not exist: {self.root_dir}")
        self.latency = latency
        self._events: queue.Queue = queue.Queue()
        self.handler = ChangeEventHandler(self.root_dir, self._events, ignore_patterns)
        self.observer = Observer()
        self._is_running = False

    def start(self) -> None:
        """Start watching."""
        if self._is_running:
            logger.warning("Change stream is already running")
            return
        self.observer.schedule(self.handler, str(self.root_dir), recursive=True)
        self.observer.start()
        self._is_running = True
        logger.debug(f"Started monitoring {self.root_dir}")

    def stop(self) -> None:
        """Stop watching and end iteration once queued paths are delivered."""
        if self._is_running:
            self.observer.stop()
            self.observer.join()
            self._is_running = False
            logger.debug(f"Stopped monitoring {self.root_dir}")
        self._events.put(_STOP)

    def _collect_batch(self) -> tuple[list[str], bool]:
        first = self._events.get()
        if first is _STOP:
            return [], True
        batch = [first]
        deadline = time.monotonic() + self.latency
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            try:
                item = self._events.get(timeout=remaining)
            except queue.Empty:
                break
            if item is _STOP:
                return batch, True
            batch.append(item)
        return batch, False

    def __iter__(self) -> Iterator[str]:
        while True:
            batch, stopped = self._collect_batch()
            yield from dict.fromkeys(batch)
            if stopped:
                return

    def __enter__(self) -> "ChangeStream":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
