"""Repository layer for data access."""

from .protocol import RepositoryProtocol
from .todo_file import TodoFileRepository

__all__ = [
    "RepositoryProtocol",
    "TodoFileRepository",
]
