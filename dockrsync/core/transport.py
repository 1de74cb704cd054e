"""Remote-shell invocations that reach into a container."""

import shlex
from typing import NamedTuple

DOCKER = "docker"


class TransportInvocation(NamedTuple):
    """A `docker exec` invocation bound to one container.

    Only ``rsh()`` joins it into a shell-quoted string; everything else passes
    argument lists.
    """

    program: str
    args: tuple[str, ...]
    container_id: str

    def argv(self, *command: str) -> list[str]:
        """Arguments to run `command` inside the container."""
        return [self.program, *self.args, self.container_id, *command]

    def rsh(self) -> str:
        """Remote shell for rsync; rsync appends the container id from the remote spec."""
        return shlex.join([self.program, *self.args])

    def remote(self, path: str) -> str:
        """Remote spec of a path inside the container, as rsync expects it."""
        return f"{self.container_id}:{path}"


class TransportBuilder:
    """Builds interactive (TTY) and piped invocations for a container."""

    def __init__(self, program: str = DOCKER) -> None:
        self.program = program

    def build(self, container_id: str, interactive: bool = False) -> TransportInvocation:
        if not container_id or not container_id.strip():
            raise ValueError("container_id must not be blank")
        args = ("exec", "-it") if interactive else ("exec", "-i")
        return TransportInvocation(self.program, args, container_id.strip())
