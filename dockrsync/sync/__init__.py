"""
Push, fetch and watch synchronization between the project and its container.
"""

from .rsync import ContainerSynchronizer
from .watch import WatchLoop

__all__ = ['ContainerSynchronizer', 'WatchLoop']
