"""Project settings stored in the `.dockrsync` file."""

from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import dotenv_values, set_key
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dockrsync.errors import InvalidSettings, SettingsMissing

TRUTHY_DELETE_VALUES = {"--delete", "true", "1", "yes", "y", "on"}

# file key -> model field
SETTINGS_KEYS = {
    "DEFAULT_SERVICE": "default_service",
    "DEFAULT_CONTAINER": "default_container",
    "ANYBAR_PORT": "notifier_port",
    "DELETE_FLAG": "delete_enabled",
    "REMOTE_DIR": "remote_dir",
    "COMPOSE_COMMAND": "compose_command",
    "WATCH_LATENCY": "watch_latency",
}


class Settings(BaseModel):
    """Immutable settings for one dockrsync invocation.

    The default target is picked in this order: ``default_service``, then the
    legacy ``default_container`` key.
    """

    model_config = ConfigDict(frozen=True)

    default_service: Optional[str] = Field(None, description="Service used when none is given")
    default_container: Optional[str] = Field(None, description="Legacy fallback for default_service")
    notifier_port: Optional[int] = Field(None, description="Local UDP port of the status indicator")
    delete_enabled: bool = Field(False, description="Remove destination files missing from the source")
    remote_dir: str = Field("/app", description="Project root inside the container")
    compose_command: str = Field("docker-compose", description="Command used to query running containers")
    watch_latency: float = Field(0.1, ge=0, description="Coalescing window of the watcher in seconds")

    @field_validator("default_service", "default_container", "notifier_port", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("delete_enabled", mode="before")
    @classmethod
    def _parse_delete_flag(cls, value: Any) -> Any:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY_DELETE_VALUES
        return value

    @field_validator("remote_dir")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or "/"

    @property
    def default_target(self) -> Optional[str]:
        """The configured default service name, if any."""
        return self.default_service or self.default_container

    @classmethod
    def from_mapping(cls, values: Dict[str, Optional[str]]) -> "Settings":
        """Build settings from ``KEY=value`` pairs, ignoring unknown keys and blank optional values."""
        data = {}
        for key, value in values.items():
            field = SETTINGS_KEYS.get(key.strip())
            if field is None:
                logger.debug(f"Ignoring unknown settings key: {key}")
                continue
            if value is None:
                continue
            if field in ("remote_dir", "compose_command", "watch_latency") and not value.strip():
                continue
            data[field] = value
        try:
            return cls(**data)
        except ValidationError as error:
            raise InvalidSettings(f"Invalid settings: {error}") from error

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """Load settings from a file, raising SettingsMissing if it does not exist."""
        path = Path(path)
        if not path.is_file():
            raise SettingsMissing(path)
        values = dotenv_values(path)
        settings = cls.from_mapping(values)
        logger.debug(f"Loaded settings from {path}: {settings}")
        return settings

    def to_mapping(self) -> Dict[str, str]:
        """The settings as file keys and string values; unset values are empty."""
        return {
            "DEFAULT_SERVICE": self.default_service or "",
            "ANYBAR_PORT": str(self.notifier_port or ""),
            "DELETE_FLAG": "--delete" if self.delete_enabled else "",
            "REMOTE_DIR": self.remote_dir,
            "COMPOSE_COMMAND": self.compose_command,
        }

    def write(self, path: str | Path) -> None:
        """Write the settings file, replacing any previous content."""
        path = Path(path)
        path.write_text("")
        for key, value in self.to_mapping().items():
            set_key(path, key, value, quote_mode="always")
        logger.debug(f"Wrote settings to {path}")
