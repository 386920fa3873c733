"""Single task line widget."""

from __future__ import annotations

from rich.markup import escape
from textual.widgets import Static

from ...models import ALL_CATEGORY, Task

# Priority letter -> color
PRIORITY_COLORS: dict[str, str] = {
    "A": "red",
    "B": "yellow",
    "C": "green",
    "D": "cyan",
    "E": "blue",
    "F": "magenta",
}
FALLBACK_PRIORITY_COLOR = "gray"

CATEGORY_WIDTH = 8


def format_task(task: Task, show_category: bool) -> str:
    """Build the markup for one task line.

    Columns: date, priority, @category (only under the "all" filter), text.
    """
    date_style = "gray" if task.completed else "yellow"
    parts = [f"[{date_style}]{escape(task.date):<10}[/]"]

    if task.priority:
        color = PRIORITY_COLORS.get(task.priority.upper(), FALLBACK_PRIORITY_COLOR)
        parts.append(f"[bold {color}]{escape(task.priority_tag):<4}[/]")
    else:
        parts.append(" " * 4)

    if show_category:
        color = "magenta" if task.category == ALL_CATEGORY else "cyan"
        name = escape(task.category.ljust(CATEGORY_WIDTH - 1))
        parts.append(f"[dim]@[/][{color}]{name}[/]")

    text_style = "dim" if task.completed else "bold"
    parts.append(f"[{text_style}]{escape(task.text)}[/]")
    return " ".join(parts)


class TaskRow(Static):
    """A task displayed in the task list."""

    def __init__(self, task_data: Task, show_category: bool, *args, **kwargs) -> None:
        super().__init__(format_task(task_data, show_category), *args, **kwargs)
        self._task_data = task_data
        if task_data.completed:
            self.add_class("-completed")

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this row."""
        return self._task_data
