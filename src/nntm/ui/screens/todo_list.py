"""Main todo list screen."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header

from ...models import ALL_CATEGORY, Task
from ...services import TaskStore
from ..widgets.category_panel import CategoryPanel
from ..widgets.prompt_bar import PromptBar
from ..widgets.task_list import TaskList


class TodoListScreen(Screen):
    """Category panel plus the task list of the selected category."""

    LAYERS = ["base", "command"]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._category_index = 0
        self._selected = 0

    @property
    def store(self) -> TaskStore:
        return self.app.store  # pyrefly: ignore[missing-attribute]

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            yield CategoryPanel(id="category-panel")
            yield TaskList(id="task-list")
        yield PromptBar()
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_list()

    # --- Selection state ---

    @property
    def category(self) -> str:
        """The active category filter."""
        categories = self.store.categories
        if 0 <= self._category_index < len(categories):
            return categories[self._category_index]
        return ALL_CATEGORY

    @property
    def selected_index(self) -> int:
        """Visible index of the selected task."""
        return self._selected

    @property
    def visible_count(self) -> int:
        return self.store.count_visible(self.category)

    def get_current_task(self) -> Task | None:
        return self.store.record_at(self.category, self._selected)

    # --- Refresh ---

    def refresh_list(self) -> None:
        """Redraw the category panel and the task list from the store."""
        categories = self.store.categories
        self._category_index = min(self._category_index, len(categories) - 1)
        tasks = self.store.visible(self.category)
        self._selected = max(0, min(self._selected, len(tasks) - 1))

        status = "streaming" if self.app.streaming else ""  # pyrefly: ignore[missing-attribute]
        self.query_one(CategoryPanel).set_categories(categories, self._category_index)
        self.query_one(TaskList).set_tasks(tasks, self.category, self._selected, status)

    # --- Navigation ---

    def move_selection(self, delta: int) -> None:
        """Move the selection up or down, clamped to the list."""
        count = self.visible_count
        if count == 0:
            return
        new_index = max(0, min(self._selected + delta, count - 1))
        if new_index != self._selected:
            self._selected = new_index
            self.query_one(TaskList).select(new_index)

    def select_first(self) -> None:
        self._selected = 0
        self.query_one(TaskList).select(0)

    @property
    def at_bottom(self) -> bool:
        return self._selected + 1 >= self.visible_count

    def switch_category(self, delta: int) -> None:
        """Cycle through categories, wrapping around."""
        count = len(self.store.categories)
        self._category_index = (self._category_index + delta) % count
        self._selected = 0
        self.refresh_list()

    def jump_to_category(self, index: int) -> None:
        self._category_index = index
        self._selected = 0
        self.refresh_list()

    def follow_new_task(self) -> None:
        """Select the newest visible task after a redraw."""
        self._selected = max(0, self.visible_count - 1)
        self.refresh_list()

    @property
    def prompt_bar(self) -> PromptBar:
        return self.query_one(PromptBar)
