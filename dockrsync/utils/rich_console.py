from rich.console import Console
from rich.table import Table
from typing import Any
from rich.logging import RichHandler
import logging
import os

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_log_level() -> str:
    """Read the log level name from DOCKRSYNC_LOG_LEVEL, defaulting to INFO."""
    log_level = os.getenv("DOCKRSYNC_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        return "INFO"
    return log_level


def is_debug_mode() -> bool:
    return os.getenv("DOCKRSYNC_DEBUG", "").lower() in ["true", "1", "yes"]


# Singleton Console instances
def get_console() -> Console:
    if not hasattr(get_console, "_console"):
        get_console._console = Console()
    return get_console._console


def get_error_console() -> Console:
    if not hasattr(get_error_console, "_console"):
        get_error_console._console = Console(stderr=True)
    return get_error_console._console


def print_table(headers: list[str], rows: list[list[Any]], title: str | None = None):
    """Print a formatted table using Rich library.

    Args:
        headers (list[str]): Column headers for the table.
        rows (list[list[Any]]): Data rows to display in the table.
        title (str | None, optional): Title of the table. Defaults to None.
    """
    console = get_console()
    table = Table(title=title)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    console.print(table)


def print_error(message: str) -> None:
    """Print a single error line to stderr."""
    get_error_console().print(f"Error: {message}", style="bold red", markup=False, highlight=False, soft_wrap=True)


class RichConsoleLogger(logging.Logger):
    def __init__(self, name: str):
        super().__init__(name)

        log_level = getattr(logging, get_log_level())
        self.log_level = log_level
        self.setLevel(log_level)

        handler = RichHandler(console=get_error_console(), rich_tracebacks=True, level=log_level, show_path=False)
        self.addHandler(handler)

        if is_debug_mode():
            log_file = os.getenv("DOCKRSYNC_LOG_FILE", "dockrsync.log")
            try:
                file_handler = logging.FileHandler(log_file)
                file_handler.setLevel(log_level)
                file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
                file_handler.setFormatter(file_formatter)
                self.addHandler(file_handler)
            except OSError as e:
                self.error(f"Failed to set up file logging: {e}")

    def success(self, message: str, *args, **kwargs):
        """Log a success message at INFO level with a check mark."""
        if args:
            message = message % args
        super().info(f"✔ {message}", **kwargs)


# Singleton logger instance
_console_logger = None


def get_console_logger() -> RichConsoleLogger:
    """Get a singleton instance of RichConsoleLogger with log level from environment variables.

    Environment variables:
        DOCKRSYNC_LOG_LEVEL: Set the log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        DOCKRSYNC_DEBUG: Enable debug mode with file logging (true, 1, yes)
        DOCKRSYNC_LOG_FILE: Specify the log file path (default: dockrsync.log)

    Returns:
        RichConsoleLogger: Configured logger instance
    """
    global _console_logger
    if _console_logger is None:
        _console_logger = RichConsoleLogger("dockrsync")
    return _console_logger
