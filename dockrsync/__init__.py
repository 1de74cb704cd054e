"""
dockrsync - keep a local project in sync with a docker-compose container
"""

from dockrsync.errors import DockrsyncError
from dockrsync.settings import Settings

__version__ = "0.1.0"
__all__ = [
    "DockrsyncError",
    "Settings",
]
