"""Widget components."""

from ..screens.help import HelpScreen
from .category_panel import CategoryPanel
from .priority_modal import PriorityModal
from .prompt_bar import PromptBar
from .task_list import EmptyListMessage, TaskList
from .task_row import TaskRow

__all__ = [
    "CategoryPanel",
    "EmptyListMessage",
    "HelpScreen",
    "PriorityModal",
    "PromptBar",
    "TaskList",
    "TaskRow",
]
