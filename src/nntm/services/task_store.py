"""In-memory task collection shared by the UI and the pipe reader."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from ..codec import fold_priority, unfold_priority
from ..exceptions import CompletedTaskPriorityError
from ..models import ALL_CATEGORY, MAX_CATEGORY_LEN, MAX_TASKS, CategoryRegistry, Task

logger = logging.getLogger(__name__)

# Sort key for tasks without a priority (after every letter)
_UNSET_PRIORITY_KEY = 127


class TaskStore:
    """
    Ordered, capacity-bounded collection of tasks plus the category registry.

    Queries and index-addressed mutations take the active category filter
    explicitly. "all" matches every task; any other value is an exact match.
    A visible index is a position within the filtered subsequence.

    Every method holds ``lock``. Callers that need several operations to
    appear atomic (the pipe reader, the persistence writes) hold it around
    the whole sequence; it is reentrant.
    """

    def __init__(self, capacity: int = MAX_TASKS) -> None:
        self.capacity = capacity
        self.lock = threading.RLock()
        self._tasks: list[Task] = []
        self._categories = CategoryRegistry(capacity)

    # --- Queries ---

    def __len__(self) -> int:
        with self.lock:
            return len(self._tasks)

    def snapshot(self) -> list[Task]:
        """Return all tasks in storage order."""
        with self.lock:
            return list(self._tasks)

    @property
    def categories(self) -> list[str]:
        """Known categories in display order, "all" first."""
        with self.lock:
            return list(self._categories)

    def visible(self, category: str) -> list[Task]:
        """Return the tasks matching a category filter, in storage order."""
        with self.lock:
            return [t for t in self._tasks if t.matches(category)]

    def count_visible(self, category: str) -> int:
        """Number of tasks matching a category filter."""
        with self.lock:
            if category == ALL_CATEGORY:
                return len(self._tasks)
            return sum(1 for t in self._tasks if t.category == category)

    def record_at(self, category: str, index: int) -> Task | None:
        """Map a visible index to its task, or None if out of range."""
        with self.lock:
            position = self._storage_position(category, index)
            if position is None:
                return None
            return self._tasks[position]

    def completed_tasks(self) -> list[Task]:
        """All completed tasks, ignoring any filter."""
        with self.lock:
            return [t for t in self._tasks if t.completed]

    # --- Structural mutations ---

    def load(self, tasks: Iterable[Task]) -> int:
        """Replace the whole collection, rebuilding the category registry.

        Tasks past capacity are dropped. Returns the number loaded.
        """
        with self.lock:
            self._tasks = []
            self._categories.clear()
            for task in tasks:
                if len(self._tasks) >= self.capacity:
                    logger.warning("Capacity of %d tasks reached, ignoring the rest", self.capacity)
                    break
                self._categories.add(task.category)
                self._tasks.append(task)
            logger.debug("Loaded %d tasks in %d categories", len(self._tasks), len(self._categories))
            return len(self._tasks)

    def append(self, task: Task) -> bool:
        """Append a task at the end of storage order.

        Returns False (and does nothing) at capacity.
        """
        with self.lock:
            if len(self._tasks) >= self.capacity:
                logger.debug("append refused, store is full: %s", task.text)
                return False
            self._categories.add(task.category)
            self._tasks.append(task)
            return True

    def insert_after(self, category: str, index: int, task: Task) -> bool:
        """Insert a task right after the visible task at ``index``.

        Falls back to appending when nothing is visible at that index.
        Returns False (and does nothing) at capacity.
        """
        with self.lock:
            if len(self._tasks) >= self.capacity:
                logger.debug("insert refused, store is full: %s", task.text)
                return False

            self._categories.add(task.category)
            position = self._storage_position(category, index)
            if position is None:
                self._tasks.append(task)
            else:
                self._tasks.insert(position + 1, task)
            return True

    def remove_completed(self) -> int:
        """Remove every completed task, keeping the others in order."""
        with self.lock:
            before = len(self._tasks)
            self._tasks = [t for t in self._tasks if not t.completed]
            return before - len(self._tasks)

    def add_category(self, name: str) -> int | None:
        """Register a category, returning its index in the registry."""
        with self.lock:
            return self._categories.add(_clean_category(name))

    # --- Per-task mutations ---

    def toggle_completed(self, category: str, index: int, today: str) -> Task | None:
        """Flip the completion state of a visible task.

        Completing stamps ``completion_date`` and folds the priority into the
        text; reopening clears the date and restores the folded priority.
        """
        with self.lock:
            task = self.record_at(category, index)
            if task is None:
                return None

            task.completed = not task.completed
            if task.completed:
                task.completion_date = today
                fold_priority(task)
            else:
                task.completion_date = None
                unfold_priority(task)
            return task

    def set_priority(self, category: str, index: int, letter: str | None) -> Task | None:
        """Set or clear (letter=None) the priority of a visible task.

        Raises:
            CompletedTaskPriorityError: If the task is completed.
        """
        with self.lock:
            task = self.record_at(category, index)
            if task is None:
                return None
            if task.completed:
                raise CompletedTaskPriorityError("Cannot set priority on completed item.")

            task.priority = letter.upper() if letter else None
            return task

    def set_category(self, category: str, index: int, new_category: str) -> Task | None:
        """Move a visible task to another category."""
        new_category = _clean_category(new_category)
        with self.lock:
            task = self.record_at(category, index)
            if task is None:
                return None
            self._categories.add(new_category)
            task.category = new_category
            return task

    # --- Reordering within a filter ---

    def sort_by_date(self, category: str, descending: bool = False) -> None:
        """Sort the filtered tasks by date (YYYY-MM-DD compares as text)."""
        self._reorder(category, key=lambda t: t.date[:10], reverse=descending)

    def sort_by_priority(self, category: str, descending: bool = False) -> None:
        """Sort the filtered tasks by priority letter, unset last."""
        self._reorder(category, key=_priority_key, reverse=descending)

    def group_by_completion(self, category: str) -> None:
        """Move incomplete tasks before completed ones within the filter."""
        self._reorder(category, key=lambda t: t.completed, reverse=False)

    def _reorder(self, category: str, key: Callable[[Task], Any], reverse: bool) -> None:
        """Stable-sort the filtered subsequence in place among its own slots.

        Tasks outside the filter keep their positions.
        """
        with self.lock:
            slots = [i for i, t in enumerate(self._tasks) if t.matches(category)]
            ordered = sorted((self._tasks[i] for i in slots), key=key, reverse=reverse)
            for slot, task in zip(slots, ordered, strict=True):
                self._tasks[slot] = task

    # --- Private ---

    def _storage_position(self, category: str, index: int) -> int | None:
        """Translate a visible index into a storage index."""
        if index < 0:
            return None
        shown = 0
        for position, task in enumerate(self._tasks):
            if not task.matches(category):
                continue
            if shown == index:
                return position
            shown += 1
        return None


def _priority_key(task: Task) -> int:
    return ord(task.priority) if task.priority else _UNSET_PRIORITY_KEY


def _clean_category(name: str) -> str:
    """First whitespace-delimited token, bounded in length."""
    tokens = name.strip().lstrip("@").split()
    if not tokens:
        return ALL_CATEGORY
    return tokens[0][:MAX_CATEGORY_LEN]
