"""
Service resolution, container transport and exclude lists.
"""

from dockrsync.core.direction import SyncDirection
from dockrsync.core.excludes import ExcludeFiles
from dockrsync.core.services import ContainerLocator, ServiceResolver
from dockrsync.core.transport import TransportBuilder, TransportInvocation

__all__ = [
    "ContainerLocator",
    "ExcludeFiles",
    "ServiceResolver",
    "SyncDirection",
    "TransportBuilder",
    "TransportInvocation",
]
