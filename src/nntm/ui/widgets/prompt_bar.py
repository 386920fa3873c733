"""Prompt bar for one-line text input."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Input, Static

from ...models import MAX_CATEGORY_LEN, MAX_TEXT_LEN

# Prompt mode -> (label, max input length)
PROMPTS: dict[str, tuple[str, int]] = {
    "new": ("New todo:", MAX_TEXT_LEN),
    "category": ("Change type to @", MAX_CATEGORY_LEN),
    "jump": ("Jump to context @", MAX_CATEGORY_LEN),
}


class PromptBar(Widget):
    """Prompt bar at the bottom of the screen."""

    DEFAULT_CSS = """
    PromptBar {
        height: 1;
        dock: bottom;
        background: $surface;
        display: none;
        layer: command;
    }

    PromptBar.-visible {
        display: block;
    }

    PromptBar .prompt-label {
        width: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
    }

    PromptBar .prompt-input {
        width: 1fr;
        border: none;
        background: $surface;
    }

    PromptBar .prompt-input:focus {
        border: none;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._mode: str | None = None

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static("", id="prompt-label", classes="prompt-label")
            yield Input(id="prompt-input", classes="prompt-input")

    def open(self, mode: str) -> None:
        """Show the prompt for a mode and focus the input."""
        label, max_length = PROMPTS[mode]
        self._mode = mode
        self.query_one("#prompt-label", Static).update(label)
        input_widget = self.query_one("#prompt-input", Input)
        input_widget.max_length = max_length
        input_widget.value = ""
        self.add_class("-visible")
        input_widget.focus()

    def close(self) -> None:
        """Hide the prompt without submitting."""
        self._mode = None
        self.remove_class("-visible")

    @property
    def mode(self) -> str | None:
        """Mode of the open prompt, or None."""
        return self._mode

    @property
    def is_visible(self) -> bool:
        return self.has_class("-visible")
