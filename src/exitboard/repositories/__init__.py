"""Store layer for task persistence."""

from .filesystem import FilesystemTaskStore
from .http import HttpTaskStore
from .protocol import TaskStoreError, TaskStoreProtocol

__all__ = [
    "FilesystemTaskStore",
    "HttpTaskStore",
    "TaskStoreError",
    "TaskStoreProtocol",
]
