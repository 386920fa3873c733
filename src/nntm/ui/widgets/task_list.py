"""Task list widget."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import ALL_CATEGORY, Task
from .task_row import TaskRow


class TaskListScroll(VerticalScroll, inherit_bindings=False):
    """Scroll container for task rows.

    Carries none of the scroll key bindings: arrows, j/k and paging move the
    selection through the app bindings, and the selected row is scrolled
    into view. The mouse wheel still scrolls.
    """


class EmptyListMessage(Static):
    """Displayed when no task matches the category."""

    pass


class TaskList(Widget):
    """Tasks of the selected category, with a header line."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._tasks: list[Task] = []
        self._category = ALL_CATEGORY
        self._selected = 0
        self._status = ""

    def compose(self) -> ComposeResult:
        yield Static(self._header_text, id="task-list-header", classes="list-header")
        yield TaskListScroll(id="task-list-content", classes="list-content")

    @property
    def _header_text(self) -> str:
        """Category name with styled counts."""
        done = sum(1 for t in self._tasks if t.completed)
        color = "magenta" if self._category == ALL_CATEGORY else "cyan"
        text = f"[bold {color}]@{escape(self._category)}[/] [dim]({len(self._tasks)} todos, {done} done"
        if self._status:
            text += f", {escape(self._status)}"
        return text + ")[/]"

    def set_tasks(self, tasks: list[Task], category: str, selected: int, status: str = "") -> None:
        """Set the tasks to display and the selected row."""
        self._tasks = tasks
        self._category = category
        self._selected = selected
        self._status = status
        self.call_after_refresh(self._refresh_rows)

    async def _refresh_rows(self) -> None:
        """Rebuild the task rows."""
        try:
            content = self.query_one("#task-list-content", TaskListScroll)
        except Exception as e:
            self.log.error(f"Cannot find task list content: {e}")
            return

        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyListMessage(f"No @{escape(self._category)} tasks"))
        else:
            show_category = self._category == ALL_CATEGORY
            await content.mount_all(TaskRow(task, show_category) for task in self._tasks)

        try:
            header = self.query_one("#task-list-header", Static)
            header.update(self._header_text)
        except Exception:
            pass

        self.select(self._selected)

    def select(self, index: int) -> bool:
        """
        Highlight the row at the given index and scroll it into view.

        Returns:
            True if a row was highlighted, False otherwise
        """
        self._selected = index
        rows = list(self.query(TaskRow))
        for i, row in enumerate(rows):
            row.set_class(i == index, "-selected")

        if 0 <= index < len(rows):
            rows[index].scroll_visible(animate=False)
            return True
        return False
