"""Plain-text todo file repository."""

from __future__ import annotations

import logging
from pathlib import Path

from ..codec import decode_line, encode_line
from ..exceptions import TodoFileError
from ..models import MAX_TASKS, Task

logger = logging.getLogger(__name__)


class TodoFileRepository:
    """
    Repository for a todo.txt-style file.

    Tasks are stored one per line. Completed tasks can be moved to an
    append-only ``todo.archive.txt`` next to the backing file.
    """

    ARCHIVE_FILE = "todo.archive.txt"

    def __init__(self, path: Path, capacity: int = MAX_TASKS) -> None:
        """
        Initialize repository.

        Args:
            path: Path to the backing todo file
            capacity: Maximum number of tasks read by load()
        """
        self.path = path
        self.capacity = capacity

    @property
    def archive_path(self) -> Path:
        """Path of the archive file, a sibling of the backing file."""
        return self.path.parent / self.ARCHIVE_FILE

    def is_pipe(self) -> bool:
        """Check if the backing path is a named pipe."""
        return self.path.is_fifo()

    def load(self) -> list[Task]:
        """Read and decode the backing file."""
        try:
            f = self.path.open(encoding="utf-8", errors="replace")
        except OSError as e:
            raise TodoFileError(f"Cannot open {self.path}: {e.strerror or e}") from e

        tasks: list[Task] = []
        with f:
            for line in f:
                if len(tasks) >= self.capacity:
                    logger.warning("%s has more than %d tasks, ignoring the rest", self.path, self.capacity)
                    break
                tasks.append(decode_line(line))

        logger.info("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save_all(self, tasks: list[Task]) -> bool:
        """Rewrite the backing file."""
        try:
            with self.path.open("w", encoding="utf-8") as f:
                f.writelines(encode_line(t) for t in tasks)
        except OSError as e:
            logger.error("Cannot write %s: %s", self.path, e)
            return False

        logger.debug("Saved %d tasks to %s", len(tasks), self.path)
        return True

    def append_archive(self, tasks: list[Task]) -> bool:
        """Append tasks to the archive file."""
        archive_path = self.archive_path
        try:
            with archive_path.open("a", encoding="utf-8") as f:
                f.writelines(encode_line(t) for t in tasks)
        except OSError as e:
            logger.error("Cannot write archive %s: %s", archive_path, e)
            return False

        logger.info("Archived %d tasks to %s", len(tasks), archive_path)
        return True
