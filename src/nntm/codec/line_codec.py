"""Line codec for the todo file format.

One task per line:

    x <completion_date> <date> @<category> <text>     (completed)
    (<P>) <date> @<category> <text>                   (incomplete, prioritized)
    <date> @<category> <text>                         (incomplete)

Decoding is permissive: priority may come before or after the date, and
anything that does not fit the structure ends up in the text. It never
raises.

Completed tasks carry no active priority. When a task is completed its
priority is folded into the text as a trailing ``pri:X`` tag, and unfolded
back when the task is reopened (see fold_priority / unfold_priority).
"""

from __future__ import annotations

import re

from ..models import (
    ALL_CATEGORY,
    DATE_LEN,
    MAX_CATEGORY_LEN,
    MAX_TEXT_LEN,
    Task,
)

COMPLETED_MARKER = "x "
PRIORITY_TAG_PREFIX = "pri:"

# Trailing "pri:X", either at text start or after a space
_FOLDED_PRIORITY_PATTERN = re.compile(r"(?:^| )pri:([A-Za-z])$")


class _Cursor:
    """Position within a line being decoded."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    @property
    def rest(self) -> str:
        return self.line[self.pos :]

    def peek(self) -> str:
        return self.line[self.pos] if self.pos < len(self.line) else ""

    def skip_whitespace(self) -> None:
        while self.pos < len(self.line) and self.line[self.pos].isspace():
            self.pos += 1

    def take_token(self, max_len: int) -> str:
        """Consume up to max_len non-whitespace characters."""
        start = self.pos
        while (
            self.pos < len(self.line)
            and self.pos - start < max_len
            and not self.line[self.pos].isspace()
        ):
            self.pos += 1
        return self.line[start : self.pos]

    def take_priority(self) -> str | None:
        """Consume a "(X)" priority token, returning the letter."""
        chunk = self.line[self.pos : self.pos + 3]
        # ASCII letters only, the same set a folded "pri:X" tag can restore
        letter = chunk[1:2]
        if chunk[:1] == "(" and chunk[2:] == ")" and letter.isascii() and letter.isalpha():
            self.pos += 3
            self.skip_whitespace()
            return letter
        return None


def _strip_newline(line: str) -> str:
    return line.rstrip("\r\n")


def decode_line(line: str) -> Task:
    """Parse one line of the todo file into a Task."""
    cursor = _Cursor(_strip_newline(line))
    task = Task()

    # 1. Completion marker and completion date
    if cursor.line.startswith(COMPLETED_MARKER):
        task.completed = True
        cursor.pos = len(COMPLETED_MARKER)
        cursor.skip_whitespace()
        task.completion_date = cursor.take_token(DATE_LEN)
        cursor.skip_whitespace()

    # 2. Priority before the date
    task.priority = cursor.take_priority()

    # 3. Date
    task.date = cursor.take_token(DATE_LEN)
    cursor.skip_whitespace()

    # 4. Priority after the date
    if task.priority is None:
        task.priority = cursor.take_priority()

    # 5. Category
    category = ""
    if cursor.peek() == "@":
        start = cursor.pos
        cursor.pos += 1
        category = cursor.take_token(MAX_CATEGORY_LEN)
        if category:
            cursor.skip_whitespace()
        else:
            cursor.pos = start
    task.category = category or ALL_CATEGORY

    # 6. Remainder
    task.text = cursor.rest[:MAX_TEXT_LEN]

    # A completed task carries no active priority
    if task.completed:
        fold_priority(task)
    return task


def encode_line(task: Task) -> str:
    """Serialize a Task to one newline-terminated line."""
    if task.completed:
        line = f"x {task.completion_date or ''} {task.date} @{task.category} {task.text}"
    elif task.priority:
        line = f"{task.priority_tag} {task.date} @{task.category} {task.text}"
    else:
        line = f"{task.date} @{task.category} {task.text}"
    return line + "\n"


def decode_pipe_line(line: str, today: str) -> Task:
    """Parse a line received from a named pipe.

    Stream producers write free text with an optional ``@category`` token
    anywhere in the line. The token is cut out of the text; the date is the
    ingestion date.
    """
    text = _strip_newline(line)[:MAX_TEXT_LEN]
    category = ALL_CATEGORY

    at = text.find("@")
    if at >= 0:
        end = at + 1
        while end < len(text) and not text[end].isspace():
            end += 1
        token = text[at + 1 : end]
        if 0 < len(token) <= MAX_CATEGORY_LEN:
            category = token
        before = text[:at].rstrip()
        after = text[end:].lstrip()
        text = f"{before} {after}" if before and after else before or after

    return Task(date=today, category=category, text=text.strip())


def fold_priority(task: Task) -> None:
    """Move an active priority into the text as a ``pri:X`` tag.

    Called when a task becomes completed. The tag is only appended if not
    already present and if it fits the text limit; the priority field is
    cleared either way.
    """
    if not task.priority:
        return

    tag = f"{PRIORITY_TAG_PREFIX}{task.priority}"
    folded = f"{task.text} {tag}" if task.text else tag
    if f" {tag}" not in f" {task.text}" and len(folded) <= MAX_TEXT_LEN:
        task.text = folded
    task.priority = None


def unfold_priority(task: Task) -> None:
    """Restore a priority from a trailing ``pri:X`` tag in the text.

    Called when a completed task is reopened.
    """
    match = _FOLDED_PRIORITY_PATTERN.search(task.text)
    if match is None:
        return

    task.priority = match.group(1)
    task.text = task.text[: match.start()].rstrip()
