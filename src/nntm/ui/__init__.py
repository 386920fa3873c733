"""UI components."""

from .screens.todo_list import TodoListScreen
from .widgets.task_list import TaskList
from .widgets.task_row import TaskRow

__all__ = [
    "TaskList",
    "TaskRow",
    "TodoListScreen",
]
