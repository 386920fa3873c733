"""Loading tasks from the backing file or a named pipe."""

from __future__ import annotations

import contextlib
import logging
import os
import threading
import time
from collections.abc import Callable

from ..codec import decode_pipe_line
from ..models import Task
from ..repositories import RepositoryProtocol
from ..utils import today_str
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class IngestionController:
    """
    Fills the store from the backing path.

    A regular file is loaded once (batch mode). A named pipe is tailed on a
    background thread (streaming mode): every line becomes a new task at the
    end of the list, and when a writer closes the pipe it is reopened for the
    next one. The mode is decided once, at construction.
    """

    def __init__(
        self,
        store: TaskStore,
        repository: RepositoryProtocol,
        reopen_delay: float = 1.0,
        on_append: Callable[[Task], None] | None = None,
    ) -> None:
        self.store = store
        self.repository = repository
        self.reopen_delay = reopen_delay
        self.on_append = on_append
        self.is_streaming = repository.is_pipe()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Load the file, or start tailing the pipe.

        Raises:
            TodoFileError: In batch mode, if the file cannot be opened.
        """
        if self.is_streaming:
            self._start_streaming()
        else:
            self.load_batch()

    def load_batch(self) -> int:
        """Load every line of the backing file into the store."""
        tasks = self.repository.load()
        return self.store.load(tasks)

    def stop(self, timeout: float = 0.5) -> None:
        """Ask the pipe reader to exit, waiting up to ``timeout`` seconds.

        The reader may be blocked waiting for a writer to open the pipe, so
        the write end is opened to wake it up. A reader stuck on a writer
        that never closes is left behind; it is a daemon thread.
        """
        self._stop.set()
        deadline = time.monotonic() + timeout
        while self.is_running and time.monotonic() < deadline:
            self._wake_reader()
            self._thread.join(0.05)

    def _wake_reader(self) -> None:
        with contextlib.suppress(OSError):
            fd = os.open(self.repository.path, os.O_WRONLY | os.O_NONBLOCK)
            os.close(fd)

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # --- Streaming ---

    def _start_streaming(self) -> None:
        if self.is_running:
            return
        logger.info("Streaming tasks from pipe %s", self.repository.path)
        self._thread = threading.Thread(
            target=self._read_pipe_forever,
            name="nntm-pipe-reader",
            daemon=True,
        )
        self._thread.start()

    def _read_pipe_forever(self) -> None:
        path = self.repository.path
        while not self._stop.is_set():
            try:
                f = path.open(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning("Cannot open pipe %s: %s", path, e)
                self._stop.wait(self.reopen_delay)
                continue

            with f:
                for line in f:
                    if self._stop.is_set():
                        return
                    self.ingest_line(line)

            # Writer closed the pipe, wait for the next one
            logger.debug("Pipe %s closed by writer, reopening", path)
            self._stop.wait(self.reopen_delay)

    def ingest_line(self, line: str) -> Task | None:
        """Decode one pipe line and append it to the store.

        Returns the new task, or None if the store is full.
        """
        with self.store.lock:
            task = decode_pipe_line(line, today_str())
            if not self.store.append(task):
                return None

        if self.on_append is not None:
            self.on_append(task)
        return task
