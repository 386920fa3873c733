"""Task domain model."""

from pydantic import BaseModel, field_validator

# Format limits
MAX_TASKS = 1000
MAX_CATEGORY_LEN = 31
MAX_TEXT_LEN = 511
DATE_LEN = 10

# Pseudo-category: "no explicit category" and the match-everything filter
ALL_CATEGORY = "all"


class Task(BaseModel):
    """Represents a single line of the todo file."""

    completed: bool = False
    completion_date: str | None = None  # YYYY-MM-DD, only when completed
    date: str = ""  # YYYY-MM-DD due/log date
    priority: str | None = None  # Single letter, e.g. "A"
    category: str = ALL_CATEGORY  # "@type" token without the "@"
    text: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: str | None) -> str:
        return value or ALL_CATEGORY

    @property
    def priority_tag(self) -> str:
        """Priority as written in the file, e.g. "(A)", or "" if unset."""
        if self.priority:
            return f"({self.priority})"
        return ""

    def matches(self, category: str) -> bool:
        """Check if the task is visible under a category filter."""
        return category == ALL_CATEGORY or self.category == category
