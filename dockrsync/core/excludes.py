"""Exclude-list files handed to rsync's --exclude-from."""

from pathlib import Path

from loguru import logger

from dockrsync.core.direction import SyncDirection
from dockrsync.utils.paths import ProjectPaths

DEFAULT_GENERAL_EXCLUDES = ".*\n"
DEFAULT_FETCH_EXCLUDES = ""


class ExcludeFiles:
    """Owns the general and fetch-only exclude lists of a project."""

    def __init__(self, paths: ProjectPaths) -> None:
        self.paths = paths

    @staticmethod
    def _ensure(path: Path, default: str) -> Path:
        if not path.exists():
            logger.info(f"Creating exclude list {path}")
            path.write_text(default)
        return path

    def general(self) -> Path:
        """Path of the general exclude list, created with a dotfile pattern if missing."""
        return self._ensure(self.paths.ignore_file, DEFAULT_GENERAL_EXCLUDES)

    def fetch_only(self) -> Path:
        """Path of the fetch-only exclude list, created empty if missing."""
        return self._ensure(self.paths.fetch_ignore_file, DEFAULT_FETCH_EXCLUDES)

    def ensure_all(self) -> tuple[Path, Path]:
        """Create both lists if missing and return (general, fetch_only)."""
        return self.general(), self.fetch_only()

    def for_direction(self, direction: SyncDirection) -> list[Path]:
        """Exclude files that apply to a sync direction; only fetches use the fetch-only list."""
        general, fetch_only = self.ensure_all()
        if direction is SyncDirection.FETCH:
            return [general, fetch_only]
        return [general]
