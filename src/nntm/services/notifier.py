"""Notifications for task lifecycle events."""

from __future__ import annotations

import logging
import subprocess
from enum import Enum
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class NotifyEvent(str, Enum):
    """Task events, valued by the message prefix sent to hooks."""

    ADDED = "Added: "
    COMPLETED = "Completed: "
    UNCOMPLETED = "Uncompleted: "


class Notifier(Protocol):
    """Receives task lifecycle events."""

    def notify(self, event: NotifyEvent, text: str) -> None: ...


class NullNotifier:
    """Notifier that ignores every event."""

    def notify(self, event: NotifyEvent, text: str) -> None:
        pass


class ExecHookNotifier:
    """Runs an external executable for every event.

    The hook gets one argument, the event prefix followed by the task text,
    and runs detached with its output discarded. It is never waited on and
    its exit status is never looked at.
    """

    def __init__(self, script: Path | str) -> None:
        # Absolute, so a bare name runs from the current directory instead
        # of being looked up on PATH
        self.script = str(Path(script).absolute())

    def notify(self, event: NotifyEvent, text: str) -> None:
        if not text:
            return

        message = f"{event.value}{text}"
        try:
            subprocess.Popen(
                [self.script, message],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.debug("Exec hook %s failed to start: %s", self.script, e)
            return

        logger.debug("Exec hook started: %s %r", self.script, message)
