"""Error types raised by dockrsync."""


class DockrsyncError(Exception):
    """Base exception for dockrsync errors."""


class SettingsMissing(DockrsyncError):
    """Raised when the project has no settings file."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"No settings found at {path}. Run `dockrsync setup` first.")


class InvalidSettings(DockrsyncError):
    """Raised when the settings file holds values that cannot be used."""


class NoServiceSpecified(DockrsyncError):
    """Raised when no service was given and no default is configured."""

    def __init__(self) -> None:
        super().__init__(
            "No service specified and no default service configured. "
            "Pass a service name or set DEFAULT_SERVICE in .dockrsync."
        )


class ContainerNotFound(DockrsyncError):
    """Raised when no running container exists for a service."""

    def __init__(self, service: str, detail: str = "") -> None:
        self.service = service
        message = f"No running container found for service '{service}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedExecArgs(DockrsyncError):
    """Raised when exec arguments do not follow `[service] -- command...`."""

    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        super().__init__("Usage: dockrsync exec [service] -- command...")


class TransferFailed(DockrsyncError):
    """Raised when rsync exits with a non-zero status."""

    def __init__(self, returncode: int, command: list[str] | None = None) -> None:
        self.returncode = returncode
        self.command = command or []
        super().__init__(f"rsync exited with status {returncode}")


class NotificationFailed(DockrsyncError):
    """Raised inside the status notifier when a signal cannot be sent."""


class ToolNotFound(DockrsyncError):
    """Raised when an external program is not installed."""

    def __init__(self, program: str) -> None:
        self.program = program
        super().__init__(f"'{program}' was not found on PATH")
