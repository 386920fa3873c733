"""nntm TUI Application."""

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Input

from .config import Settings
from .exceptions import CompletedTaskPriorityError, NntmError, StreamingModeError
from .models import Task
from .repositories import TodoFileRepository
from .services import (
    ExecHookNotifier,
    IngestionController,
    Notifier,
    NullNotifier,
    TaskService,
    TaskStore,
)
from .ui.screens.todo_list import TodoListScreen
from .ui.widgets import HelpScreen, PriorityModal


class NntmApp(App):
    """nntm - terminal todo.txt viewer."""

    TITLE = "nntm"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        # Navigation - vim style
        Binding("j", "nav_down", "↓ Todo", show=False),
        Binding("k", "nav_up", "↑ Todo", show=False),
        Binding("h", "prev_category", "← Context", show=False),
        Binding("l", "next_category", "→ Context", show=False),
        # Navigation - arrow keys
        Binding("down", "nav_down", "↓ Todo", show=False),
        Binding("up", "nav_up", "↑ Todo", show=False),
        Binding("left", "prev_category", "← Context", show=False),
        Binding("right", "next_category", "→ Context", show=False),
        Binding("@", "jump_category", "Context", show=True),
        Binding("f", "toggle_auto_scroll", "Follow", show=False),
        # Task actions
        Binding("space", "toggle_completed", "Done", show=True),
        Binding("n", "new_task", "New", show=True),
        Binding("s", "set_priority", "Priority", show=True),
        Binding("t", "change_category", "Retype", show=False),
        Binding("A", "archive", "Archive", show=True),
        # Ordering
        Binding("p", "sort_priority", "Sort prio", show=False),
        Binding("P", "sort_priority_desc", "Sort prio desc", show=False),
        Binding("d", "sort_date", "Sort date", show=False),
        Binding("D", "sort_date_desc", "Sort date desc", show=False),
        Binding("g", "group_completed", "Group", show=False),
        Binding("G", "reload", "Reload", show=False),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "todo_list": TodoListScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.auto_scroll = self.settings.auto_scroll
        self._init_services()

    def _init_services(self) -> None:
        """Initialize store, repository and services."""
        self.store = TaskStore(self.settings.capacity)
        self.repository = TodoFileRepository(self.settings.todo_file, self.settings.capacity)

        notifier: Notifier = NullNotifier()
        if self.settings.exec_hook is not None:
            notifier = ExecHookNotifier(self.settings.exec_hook)

        self.ingestion = IngestionController(
            self.store,
            self.repository,
            reopen_delay=self.settings.pipe_reopen_delay,
            on_append=self._task_streamed,
        )
        self.task_service = TaskService(
            self.store,
            self.repository,
            notifier,
            streaming=self.ingestion.is_streaming,
        )

    @property
    def streaming(self) -> bool:
        return self.ingestion.is_streaming

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen("todo_list")
        if self.streaming:
            self.ingestion.start()

    async def action_quit(self) -> None:
        """Stop the pipe reader, then quit."""
        self.ingestion.stop()
        await super().action_quit()

    def _list_screen(self) -> TodoListScreen | None:
        screen = self.screen
        if isinstance(screen, TodoListScreen):
            return screen
        return None

    # --- Streaming ---

    def _task_streamed(self, task: Task) -> None:  # noqa: ARG002
        """Called on the pipe reader thread after each appended task."""
        if self.is_running:
            self.call_from_thread(self._follow_stream)

    def _follow_stream(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        if self.auto_scroll:
            screen.follow_new_task()
        else:
            screen.refresh_list()

    def action_toggle_auto_scroll(self) -> None:
        self.auto_scroll = not self.auto_scroll
        self.notify(f"Auto-scroll: {'ON' if self.auto_scroll else 'OFF'}", timeout=1)

    # --- Navigation ---

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_nav_down(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        screen.move_selection(1)
        # Reaching the bottom of a live list starts following it again
        if self.streaming and not self.auto_scroll and screen.at_bottom:
            self.auto_scroll = True

    def action_nav_up(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        self.auto_scroll = False
        screen.move_selection(-1)

    def action_prev_category(self) -> None:
        screen = self._list_screen()
        if screen:
            screen.switch_category(-1)

    def action_next_category(self) -> None:
        screen = self._list_screen()
        if screen:
            screen.switch_category(1)

    # --- Task actions ---

    def action_toggle_completed(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        if self._run_edit(
            lambda: self.task_service.toggle_completed(screen.category, screen.selected_index)
        ):
            screen.refresh_list()

    def action_set_priority(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        task = screen.get_current_task()
        if task is None:
            return
        if task.completed:
            self.notify("Cannot set priority on completed item.", severity="warning", timeout=1)
            return
        self.push_screen(PriorityModal(), callback=self._handle_priority)

    def _handle_priority(self, letter: str | None) -> None:
        """Handle the priority modal result ("" clears, None cancels)."""
        screen = self._list_screen()
        if screen is None or letter is None:
            return
        if self._run_edit(
            lambda: self.task_service.set_priority(
                screen.category, screen.selected_index, letter or None
            )
        ):
            screen.refresh_list()

    def action_new_task(self) -> None:
        self._open_prompt("new")

    def action_change_category(self) -> None:
        screen = self._list_screen()
        if screen is None or screen.get_current_task() is None:
            return
        self._open_prompt("category")

    def action_jump_category(self) -> None:
        self._open_prompt("jump")

    def action_archive(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        count = self._run_edit(self.task_service.archive)
        if count:
            screen.select_first()
            screen.refresh_list()
            self.notify(f"Archived {count} todos", timeout=2)

    # --- Ordering ---

    def _reorder(self, reorder) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        reorder(screen.category)
        screen.select_first()
        screen.refresh_list()

    def action_sort_priority(self) -> None:
        self._reorder(lambda c: self.task_service.sort_by_priority(c, descending=False))

    def action_sort_priority_desc(self) -> None:
        self._reorder(lambda c: self.task_service.sort_by_priority(c, descending=True))

    def action_sort_date(self) -> None:
        self._reorder(lambda c: self.task_service.sort_by_date(c, descending=False))

    def action_sort_date_desc(self) -> None:
        self._reorder(lambda c: self.task_service.sort_by_date(c, descending=True))

    def action_group_completed(self) -> None:
        self._reorder(self.task_service.group_by_completion)

    def action_reload(self) -> None:
        screen = self._list_screen()
        if screen is None:
            return
        if self._run_edit(self.task_service.reload) is not None:
            screen.select_first()
            screen.refresh_list()

    # --- Prompt handling ---

    def _open_prompt(self, mode: str) -> None:
        screen = self._list_screen()
        if screen:
            screen.prompt_bar.open(mode)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle prompt submission."""
        if event.input.id != "prompt-input":
            return
        screen = self._list_screen()
        if screen is None:
            return

        mode = screen.prompt_bar.mode
        screen.prompt_bar.close()
        value = event.value.strip()
        if not value:
            return

        if mode == "new":
            task = self._run_edit(
                lambda: self.task_service.add_task(screen.category, screen.selected_index, value)
            )
            if task is not None:
                screen.move_selection(1)
            screen.refresh_list()
        elif mode == "category":
            self._run_edit(
                lambda: self.task_service.change_category(
                    screen.category, screen.selected_index, value
                )
            )
            screen.refresh_list()
        elif mode == "jump":
            index = self.store.add_category(value)
            if index is not None:
                screen.jump_to_category(index)

    def action_escape(self) -> None:
        """Handle escape: dismiss modal or close the prompt."""
        screen = self.screen

        if isinstance(screen, ModalScreen):
            screen.dismiss()
            return

        if isinstance(screen, TodoListScreen) and screen.prompt_bar.is_visible:
            screen.prompt_bar.close()

    def _run_edit(self, edit):
        """Run a service call, turning refusals into transient notices."""
        try:
            return edit()
        except (StreamingModeError, CompletedTaskPriorityError) as e:
            self.notify(str(e), severity="warning", timeout=1)
        except NntmError as e:
            self.notify(str(e), severity="error", timeout=3)
        return None


def run(settings: Settings | None = None) -> None:
    """Run the nntm application.

    In batch mode the file is loaded before the UI starts, so a missing
    file fails before the terminal is taken over.

    Raises:
        TodoFileError: If the backing file cannot be opened.
    """
    app = NntmApp(settings)
    if not app.streaming:
        app.ingestion.load_batch()
    app.run()
