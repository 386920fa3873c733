"""Exceptions raised by nntm."""


class NntmError(Exception):
    """Base class for nntm errors."""

    pass


class TodoFileError(NntmError):
    """Raised when the backing todo file cannot be opened for loading."""

    pass


class CompletedTaskPriorityError(NntmError):
    """Raised when setting a priority on a completed task."""

    pass


class StreamingModeError(NntmError):
    """Raised when an edit is attempted while ingesting from a pipe."""

    pass
