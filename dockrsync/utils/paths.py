from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field

SETTINGS_FILE = ".dockrsync"
IGNORE_FILE = ".dockrsync-ignore"
FETCH_IGNORE_FILE = ".dockrsync-ignore-fetch"


class ProjectPaths(BaseModel):
    """Locations of the files dockrsync keeps in a project root."""

    model_config = ConfigDict(frozen=True)

    root_dir: Path = Field(default_factory=lambda: Path.cwd())

    @classmethod
    def with_project_root(cls, root_dir: str | Path) -> "ProjectPaths":
        """Build paths for an explicit project root."""
        return cls(root_dir=Path(root_dir).resolve())

    @property
    def settings_file(self) -> Path:
        return self.root_dir / SETTINGS_FILE

    @property
    def ignore_file(self) -> Path:
        return self.root_dir / IGNORE_FILE

    @property
    def fetch_ignore_file(self) -> Path:
        return self.root_dir / FETCH_IGNORE_FILE


def get_project_paths() -> ProjectPaths:
    """Get paths for the project in the current working directory."""
    return ProjectPaths.with_project_root(Path.cwd())
