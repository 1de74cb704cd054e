"""Resolution of service names and their running containers."""

import shlex
import subprocess
from pathlib import Path
from typing import Optional

from loguru import logger

from dockrsync.errors import ContainerNotFound, NoServiceSpecified, ToolNotFound
from dockrsync.settings import Settings


class ServiceResolver:
    """Picks the service a command targets."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def check(self, explicit: Optional[str] = None) -> None:
        """Fail early when neither an explicit service nor a default is available."""
        if not explicit and not self.settings.default_target:
            raise NoServiceSpecified()

    def resolve(self, explicit: Optional[str] = None) -> str:
        """Return the explicit service if given, else the configured default.

        Raises:
            NoServiceSpecified: If neither is available
        """
        self.check(explicit)
        service = explicit or self.settings.default_target
        logger.debug(f"Resolved service: {service}")
        return service


class ContainerLocator:
    """Finds the running container of a compose service."""

    def __init__(self, settings: Settings, project_root: str | Path) -> None:
        self.compose_command = shlex.split(settings.compose_command)
        self.project_root = Path(project_root)

    def query_command(self, service: str) -> list[str]:
        return [*self.compose_command, "ps", "-q", service]

    def locate(self, service: str) -> str:
        """Return the container id for a service.

        Raises:
            ContainerNotFound: If the query returns nothing usable
            ToolNotFound: If the compose command is not installed
        """
        command = self.query_command(service)
        logger.debug(f"Running container query: {shlex.join(command)}")
        try:
            result = subprocess.run(
                command,
                cwd=self.project_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise ToolNotFound(command[0])

        stdout = result.stdout or ""
        container_ids = [line.strip() for line in stdout.splitlines() if line.strip()]
        if not container_ids:
            detail = (result.stderr or "").strip() if result.returncode != 0 else ""
            raise ContainerNotFound(service, detail)

        if len(container_ids) > 1:
            logger.warning(f"Service '{service}' has {len(container_ids)} containers, using the first")
        logger.debug(f"Service '{service}' runs in container {container_ids[0]}")
        return container_ids[0]
