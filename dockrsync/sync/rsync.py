"""
Container Synchronization
=========================

This module runs rsync between the project root and the container, using
`docker exec -i` as rsync's remote shell. It covers the one-shot push and
fetch commands and the single-path transfers issued by the watch loop.
"""

import shlex
import subprocess
from pathlib import Path
from typing import Optional

from loguru import logger

from dockrsync.core.direction import SyncDirection
from dockrsync.core.excludes import ExcludeFiles
from dockrsync.core.services import ContainerLocator, ServiceResolver
from dockrsync.core.transport import TransportBuilder, TransportInvocation
from dockrsync.errors import ToolNotFound, TransferFailed
from dockrsync.notifier import StatusNotifier
from dockrsync.settings import Settings
from dockrsync.utils.logging import timeit
from dockrsync.utils.paths import ProjectPaths

RSYNC = "rsync"
RSYNC_BASE_OPTIONS = ["--archive", "--compress", "--blocking-io"]

__all__ = ["ContainerSynchronizer", "SyncDirection", "RSYNC"]


class ContainerSynchronizer:
    """Synchronizes the project root with a service's container."""

    def __init__(
        self,
        settings: Settings,
        paths: ProjectPaths,
        resolver: ServiceResolver,
        locator: ContainerLocator,
        transport_builder: TransportBuilder,
        excludes: ExcludeFiles,
        notifier: StatusNotifier,
    ):
        """Initialize the ContainerSynchronizer.

        Args:
            settings: Settings of the current invocation
            paths: Project file locations
            resolver: Picks the target service
            locator: Finds the container of a service
            transport_builder: Builds the docker exec remote shell
            excludes: Exclude list files
            notifier: Status indicator
        """
        self.settings = settings
        self.paths = paths
        self.resolver = resolver
        self.locator = locator
        self.transport_builder = transport_builder
        self.excludes = excludes
        self.notifier = notifier

    @property
    def remote_root(self) -> str:
        return self.settings.remote_dir.rstrip("/") + "/"

    @property
    def local_root(self) -> str:
        return str(self.paths.root_dir).rstrip("/") + "/"

    def transport_for(self, service: Optional[str] = None) -> TransportInvocation:
        """Resolve service -> container -> non-interactive transport."""
        target = self.resolver.resolve(service)
        container_id = self.locator.locate(target)
        return self.transport_builder.build(container_id, interactive=False)

    def _base_command(self, direction: SyncDirection, transport: TransportInvocation) -> list[str]:
        command = [RSYNC, *RSYNC_BASE_OPTIONS, "--rsh", transport.rsh()]
        for exclude_file in self.excludes.for_direction(direction):
            command.extend(["--exclude-from", str(exclude_file)])
        if self.settings.delete_enabled:
            command.append("--delete")
        return command

    def build_command(
        self,
        direction: SyncDirection,
        transport: TransportInvocation,
        relative_path: Optional[str] = None,
    ) -> list[str]:
        """Build the rsync argument list for a transfer.

        Args:
            direction: Transfer direction, selects source, destination and exclude lists
            transport: Remote shell bound to the target container
            relative_path: For WATCH, the `./`-prefixed path to transfer

        Returns:
            list[str]: Arguments for subprocess, rsync first
        """
        command = self._base_command(direction, transport)
        if direction is SyncDirection.PUSH:
            command.extend([self.local_root, transport.remote(self.remote_root)])
        elif direction is SyncDirection.FETCH:
            command.extend([transport.remote(self.remote_root), self.local_root])
        else:
            if relative_path is None:
                raise ValueError("relative_path is required for watch transfers")
            command.extend(["--relative", relative_path, transport.remote(self.remote_root)])
        return command

    @timeit
    def _run(self, command: list[str]) -> None:
        logger.debug(f"Running: {shlex.join(command)}")
        try:
            result = subprocess.run(command, cwd=self.paths.root_dir, check=False)
        except FileNotFoundError:
            raise ToolNotFound(command[0])
        if result.returncode != 0:
            raise TransferFailed(result.returncode, command)

    def sync_once(self, direction: SyncDirection, service: Optional[str] = None) -> None:
        """Run one bulk transfer in the given direction.

        Raises:
            NoServiceSpecified, ContainerNotFound: Before anything is transferred
            TransferFailed: If rsync exits non-zero
        """
        if direction is SyncDirection.WATCH:
            raise ValueError("Use sync_path for watch transfers")
        transport = self.transport_for(service)
        command = self.build_command(direction, transport)
        self.notifier.busy()
        try:
            self._run(command)
        finally:
            self.notifier.idle()

    def push(self, service: Optional[str] = None) -> None:
        """Copy the project root into the container."""
        self.sync_once(SyncDirection.PUSH, service)

    def fetch(self, service: Optional[str] = None) -> None:
        """Copy the container's project root back to disk."""
        self.sync_once(SyncDirection.FETCH, service)

    def sync_path(self, relative_path: str, transport: TransportInvocation) -> None:
        """Transfer one project-relative path into the container.

        Notifications are left to the caller.
        """
        self._run(self.build_command(SyncDirection.WATCH, transport, relative_path))
