"""Repository protocol for todo storage backends."""

from pathlib import Path
from typing import Protocol

from ..models import Task


class RepositoryProtocol(Protocol):
    """Interface for todo storage backends.

    The store owns the in-memory tasks; a repository only moves them between
    memory and the backing file. Write failures are reported through the
    return value, never raised.
    """

    path: Path

    def is_pipe(self) -> bool:
        """Check if the backing path is a named pipe (streaming source)."""
        ...

    def load(self) -> list[Task]:
        """Load all tasks from the backing file.

        Returns:
            Decoded tasks, in file order, at most ``capacity`` of them.

        Raises:
            TodoFileError: If the backing file cannot be opened.
        """
        ...

    def save_all(self, tasks: list[Task]) -> bool:
        """Rewrite the backing file with the given tasks.

        Returns:
            True if the file was written, False if the write was abandoned.
        """
        ...

    def append_archive(self, tasks: list[Task]) -> bool:
        """Append tasks to the archive file.

        Returns:
            True if the archive was written, False if the write was abandoned.
        """
        ...
