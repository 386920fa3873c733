"""Service for task edits, persistence and notifications."""

from __future__ import annotations

import logging

from ..exceptions import StreamingModeError
from ..models import ALL_CATEGORY, MAX_TEXT_LEN, Task
from ..repositories import RepositoryProtocol
from ..utils import today_str
from .notifier import Notifier, NotifyEvent, NullNotifier
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task edits.

    Edits go through the store and are written back to the backing file
    right away. While streaming from a pipe the list is read/reorder-only:
    every edit raises StreamingModeError and nothing is written.
    """

    def __init__(
        self,
        store: TaskStore,
        repository: RepositoryProtocol,
        notifier: Notifier | None = None,
        streaming: bool = False,
    ) -> None:
        self.store = store
        self.repository = repository
        self.notifier = notifier or NullNotifier()
        self.streaming = streaming

    def _ensure_editable(self, action: str) -> None:
        if self.streaming:
            raise StreamingModeError(f"Cannot {action} while streaming")

    # --- Edits ---

    def add_task(
        self,
        category: str,
        index: int,
        text: str,
        today: str | None = None,
    ) -> Task | None:
        """
        Create a task after the visible task at ``index``.

        The new task gets the filter category, today's date and is not
        completed. Empty text is ignored. Returns None if nothing was added.
        """
        self._ensure_editable("add tasks")

        text = text.strip()[:MAX_TEXT_LEN]
        if not text:
            return None

        task = Task(date=today or today_str(), category=category or ALL_CATEGORY, text=text)
        if not self.store.insert_after(category, index, task):
            return None

        logger.info("Task added: @%s %s", task.category, task.text)
        self.notifier.notify(NotifyEvent.ADDED, task.text)
        self.persist()
        return task

    def toggle_completed(self, category: str, index: int, today: str | None = None) -> Task | None:
        """Complete or reopen the visible task at ``index``."""
        self._ensure_editable("toggle tasks")

        task = self.store.toggle_completed(category, index, today or today_str())
        if task is None:
            return None

        event = NotifyEvent.COMPLETED if task.completed else NotifyEvent.UNCOMPLETED
        logger.info("Task %s: %s", "completed" if task.completed else "reopened", task.text)
        self.notifier.notify(event, task.text)
        self.persist()
        return task

    def set_priority(self, category: str, index: int, letter: str | None) -> Task | None:
        """Set or clear the priority of the visible task at ``index``.

        Raises:
            CompletedTaskPriorityError: If the task is completed.
        """
        self._ensure_editable("set priorities")

        task = self.store.set_priority(category, index, letter)
        if task is not None:
            logger.debug("Priority set to %r: %s", task.priority, task.text)
            self.persist()
        return task

    def change_category(self, category: str, index: int, new_category: str) -> Task | None:
        """Move the visible task at ``index`` to another category."""
        self._ensure_editable("change categories")

        if not new_category.strip():
            return None

        task = self.store.set_category(category, index, new_category)
        if task is not None:
            logger.debug("Category changed to @%s: %s", task.category, task.text)
            self.persist()
        return task

    def archive(self) -> int:
        """
        Move every completed task to the archive file.

        Tasks are only removed from the list once the archive write has
        succeeded. Returns the number of archived tasks.
        """
        self._ensure_editable("archive")

        with self.store.lock:
            completed = self.store.completed_tasks()
            if not completed:
                return 0
            if not self.repository.append_archive(completed):
                return 0
            count = self.store.remove_completed()

        logger.info("Archived %d tasks", count)
        self.persist()
        return count

    def reload(self) -> int:
        """Discard in-memory changes and reload from the backing file.

        Raises:
            TodoFileError: If the file cannot be opened.
        """
        self._ensure_editable("reload")

        tasks = self.repository.load()
        return self.store.load(tasks)

    # --- Reordering (never persisted) ---

    def sort_by_date(self, category: str, descending: bool = False) -> None:
        self.store.sort_by_date(category, descending)

    def sort_by_priority(self, category: str, descending: bool = False) -> None:
        self.store.sort_by_priority(category, descending)

    def group_by_completion(self, category: str) -> None:
        self.store.group_by_completion(category)

    # --- Persistence ---

    def persist(self) -> bool:
        """Write the whole store to the backing file."""
        if self.streaming:
            return False
        with self.store.lock:
            return self.repository.save_all(self.store.snapshot())
