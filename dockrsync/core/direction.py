from enum import Enum


class SyncDirection(Enum):
    """Which way a transfer goes."""

    PUSH = "push"
    FETCH = "fetch"
    WATCH = "watch"
