"""Screen components."""

from .help import HelpScreen
from .todo_list import TodoListScreen

__all__ = [
    "HelpScreen",
    "TodoListScreen",
]
