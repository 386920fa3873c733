"""Service layer for business logic."""

from .ingestion import IngestionController
from .notifier import ExecHookNotifier, Notifier, NotifyEvent, NullNotifier
from .task_service import TaskService
from .task_store import TaskStore

__all__ = [
    "ExecHookNotifier",
    "IngestionController",
    "Notifier",
    "NotifyEvent",
    "NullNotifier",
    "TaskService",
    "TaskStore",
]
