"""Ordered registry of known categories."""

from collections.abc import Iterator

from .task import ALL_CATEGORY, MAX_TASKS


class CategoryRegistry:
    """Insertion-ordered set of category tokens.

    "all" is always the first entry. Order of first appearance is the
    display order of the category panel. Registration past ``capacity``
    is refused.
    """

    def __init__(self, capacity: int = MAX_TASKS) -> None:
        self.capacity = capacity
        self._names: list[str] = [ALL_CATEGORY]

    def add(self, name: str) -> int | None:
        """Register a category and return its index.

        Returns the existing index if already known, or None when the
        registry is full.
        """
        if name in self._names:
            return self._names.index(name)
        if len(self._names) >= self.capacity:
            return None
        self._names.append(name)
        return len(self._names) - 1

    def index(self, name: str) -> int:
        return self._names.index(name)

    def clear(self) -> None:
        """Forget every category except "all"."""
        self._names = [ALL_CATEGORY]

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __getitem__(self, index: int) -> str:
        return self._names[index]
