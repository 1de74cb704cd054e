"""Best-effort status signals for an AnyBar-style menu bar indicator."""

import socket
from typing import Optional

from loguru import logger

from dockrsync.errors import NotificationFailed

IDLE = "green"
BUSY = "orange"
ERROR = "red"
SHUTDOWN = "quit"


class StatusNotifier:
    """Sends one UDP datagram per state change; does nothing without a port."""

    def __init__(self, port: Optional[int] = None, host: str = "localhost") -> None:
        self.port = port
        self.host = host

    @property
    def enabled(self) -> bool:
        return self.port is not None

    def _send(self, token: str) -> None:
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.sendto(token.encode(), (self.host, self.port))
        except OSError as error:
            raise NotificationFailed(f"Could not send '{token}' to {self.host}:{self.port}: {error}") from error

    def send(self, token: str) -> None:
        """Send a state token. Failures are logged and dropped."""
        if not self.enabled:
            return
        try:
            self._send(token)
        except NotificationFailed as error:
            logger.debug(str(error))

    def idle(self) -> None:
        self.send(IDLE)

    def busy(self) -> None:
        self.send(BUSY)

    def error(self) -> None:
        self.send(ERROR)

    def shutdown(self) -> None:
        self.send(SHUTDOWN)
