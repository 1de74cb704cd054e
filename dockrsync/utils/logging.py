import sys
import time
from functools import wraps

from loguru import logger

from dockrsync.utils.rich_console import get_log_level, is_debug_mode


def _stderr_sink(message) -> None:
    sys.stderr.write(message)


def configure_logging() -> None:
    """Route loguru output to stderr at the level picked by DOCKRSYNC_LOG_LEVEL / DOCKRSYNC_DEBUG."""
    logger.remove()
    log_level = "DEBUG" if is_debug_mode() else get_log_level()
    logger.add(
        _stderr_sink,
        level=log_level,
        colorize=sys.stderr.isatty(),
        format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )


def timeit(func):
    """
    Decorator that logs the execution time of the decorated function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__qualname__} executed in {elapsed:.6f}s")
    return wrapper
