"""Data models."""

from .categories import CategoryRegistry
from .task import (
    ALL_CATEGORY,
    DATE_LEN,
    MAX_CATEGORY_LEN,
    MAX_TASKS,
    MAX_TEXT_LEN,
    Task,
)

__all__ = [
    "ALL_CATEGORY",
    "DATE_LEN",
    "MAX_CATEGORY_LEN",
    "MAX_TASKS",
    "MAX_TEXT_LEN",
    "CategoryRegistry",
    "Task",
]
