"""nntm - terminal viewer/editor for todo.txt-style task lists."""

__version__ = "0.1.0"
