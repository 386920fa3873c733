"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ..models import MAX_TASKS


class Settings(BaseSettings):
    """Application settings."""

    todo_file: Path = Field(
        default=Path("todo.txt"),
        description="Backing todo file, or a named pipe to stream from",
    )

    exec_hook: Path | None = Field(
        default=None,
        description="Executable run on add/complete/uncomplete events",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    capacity: int = Field(
        default=MAX_TASKS,
        gt=0,
        description="Maximum number of tasks held in memory",
    )

    pipe_reopen_delay: float = Field(
        default=1.0,
        ge=0,
        description="Seconds to wait before reopening a closed pipe",
    )

    auto_scroll: bool = Field(
        default=True,
        description="Follow newly streamed tasks",
    )

    model_config = {
        "env_prefix": "NNTM_",
    }
