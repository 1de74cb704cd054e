"""
Watch Loop
==========

Turns changed paths into one incremental rsync transfer each. Transfers run
one at a time, in the order the change stream delivers their paths.
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from dockrsync.core.transport import TransportInvocation
from dockrsync.errors import TransferFailed
from dockrsync.file_monitor import ChangeStream
from dockrsync.notifier import StatusNotifier
from dockrsync.sync.rsync import ContainerSynchronizer
from dockrsync.utils.rich_console import get_console_logger

logger = get_console_logger()

RELATIVE_MARKER = "./"


def to_relative(event_path: str | Path, root_dir: str | Path) -> str:
    """Rewrite an absolute path under ``root_dir`` as a ``./``-prefixed relative path.

    rsync's --relative mode keeps everything after the ``./`` marker, so the
    path lands below the remote root instead of at its absolute location.
    """
    relative = os.path.relpath(os.path.abspath(event_path), os.path.abspath(root_dir))
    if relative == os.curdir:
        return os.curdir
    return RELATIVE_MARKER + Path(relative).as_posix()


def transfer_target(relative_path: str, root_dir: str | Path, delete_enabled: bool) -> str:
    """Pick what to transfer for a changed path.

    With delete propagation on, a path that no longer exists is replaced by
    its parent directory so rsync can notice the missing child and remove it
    remotely. This also pushes anything else new in that directory.
    """
    if not delete_enabled or relative_path == os.curdir:
        return relative_path
    if (Path(root_dir) / relative_path).exists():
        return relative_path
    parent = os.path.dirname(relative_path)
    if parent in ("", os.curdir):
        return os.curdir
    return parent


class WatchLoop:
    """Pushes every delivered change into the container until interrupted."""

    def __init__(
        self,
        synchronizer: ContainerSynchronizer,
        notifier: StatusNotifier,
        stream_factory: Callable[..., ChangeStream] = ChangeStream,
    ) -> None:
        self.synchronizer = synchronizer
        self.notifier = notifier
        self.stream_factory = stream_factory
        self.root_dir = synchronizer.paths.root_dir
        self.delete_enabled = synchronizer.settings.delete_enabled

    def handle(self, event_path: str, transport: TransportInvocation) -> bool:
        """Process one changed path. Returns False if its transfer failed."""
        self.notifier.busy()
        relative_path = to_relative(event_path, self.root_dir)
        target = transfer_target(relative_path, self.root_dir, self.delete_enabled)
        if target != relative_path:
            logger.debug(f"{relative_path} is gone, syncing {target}")
        try:
            self.synchronizer.sync_path(target, transport)
        except TransferFailed as error:
            logger.error(f"Sync of {target} failed: {error}")
            self.notifier.error()
            self.notifier.idle()
            return False
        logger.info(f"Synced {target}")
        self.notifier.idle()
        return True

    def run(self, service: Optional[str] = None) -> None:
        """Watch the project root and push changes until Ctrl+C.

        Raises:
            NoServiceSpecified, ContainerNotFound: Before watching starts
        """
        transport = self.synchronizer.transport_for(service)
        self.synchronizer.excludes.ensure_all()
        stream = self.stream_factory(
            self.root_dir, latency=self.synchronizer.settings.watch_latency
        )
        logger.info(f"Watching {self.root_dir} (Ctrl+C to stop)...")
        self.notifier.idle()
        try:
            with stream:
                for event_path in stream:
                    self.handle(event_path, transport)
        except KeyboardInterrupt:
            logger.info("Stopped watching.")
            self.notifier.shutdown()
