"""
Test Configuration and Fixtures
=============================

This module provides pytest fixtures and utilities for testing dockrsync.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from dockrsync.core.excludes import ExcludeFiles
from dockrsync.core.services import ContainerLocator, ServiceResolver
from dockrsync.core.transport import TransportBuilder
from dockrsync.settings import Settings
from dockrsync.sync.rsync import ContainerSynchronizer
from dockrsync.utils.paths import ProjectPaths


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    Create an empty project directory.

    Returns:
        Path: Resolved path to the project root
    """
    root = tmp_path / "project"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def project_paths(project_root: Path) -> ProjectPaths:
    return ProjectPaths.with_project_root(project_root)


@pytest.fixture
def make_settings():
    """Build Settings from file-style keys."""

    def factory(**values) -> Settings:
        return Settings.from_mapping(values)

    return factory


@pytest.fixture
def notifier():
    """A StatusNotifier stand-in that records calls."""
    return MagicMock()


@pytest.fixture
def make_synchronizer(project_paths: ProjectPaths, notifier):
    """Build a ContainerSynchronizer for given settings."""

    def factory(settings: Settings) -> ContainerSynchronizer:
        return ContainerSynchronizer(
            settings=settings,
            paths=project_paths,
            resolver=ServiceResolver(settings),
            locator=ContainerLocator(settings, project_paths.root_dir),
            transport_builder=TransportBuilder(),
            excludes=ExcludeFiles(project_paths),
            notifier=notifier,
        )

    return factory

