"""Priority prompt modal."""

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label

CLEAR_KEYS = {"space", "backspace", "delete"}


class PriorityModal(ModalScreen[str | None]):
    """Asks for a priority letter.

    Dismisses with the upper-case letter, "" to clear the priority, or
    None when cancelled.
    """

    DEFAULT_CSS = """
    PriorityModal {
        align: center middle;
    }

    PriorityModal > Vertical {
        width: 50;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    PriorityModal Label {
        width: 100%;
        text-align: center;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Set priority (a-z, or space to clear)")
            yield Label("[dim]Esc to cancel[/]")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        if event.key == "escape":
            self.dismiss(None)
        elif event.key in CLEAR_KEYS:
            self.dismiss("")
        elif event.character and event.character.isascii() and event.character.isalpha():
            self.dismiss(event.character.upper())
