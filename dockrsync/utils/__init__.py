"""Utility helpers for dockrsync."""

from dockrsync.utils.paths import ProjectPaths, get_project_paths

__all__ = ["ProjectPaths", "get_project_paths"]
