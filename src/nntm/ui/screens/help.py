"""Help screen listing the key map."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

# (section title, [(keys, description), ...])
KEY_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("j / k", "Next / previous todo"),
            ("h / l", "Previous / next context"),
            ("@", "Jump to (or create) a context"),
            ("f", "Follow new todos on/off"),
        ],
    ),
    (
        "Editing",
        [
            ("Space", "Mark done / not done"),
            ("n", "New todo below the selection"),
            ("s", "Set or clear priority"),
            ("t", "Move todo to another context"),
            ("A", "Archive done todos"),
        ],
    ),
    (
        "Ordering",
        [
            ("p / P", "Priority, high first / low first"),
            ("d / D", "Date, oldest first / newest first"),
            ("g", "Open todos before done ones"),
            ("G", "Reload the file"),
        ],
    ),
    (
        "General",
        [
            ("?", "This help"),
            ("q", "Quit"),
        ],
    ),
]


class HelpScreen(ModalScreen):
    """Modal key reference, closed by any key."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 56;
        height: auto;
        max-height: 90%;
        padding: 0 2 1 2;
        background: $surface;
        border: round $primary;
    }

    HelpScreen .help-heading {
        margin-top: 1;
        text-style: bold underline;
        color: $accent;
    }

    HelpScreen Horizontal {
        height: 1;
    }

    HelpScreen .help-keys {
        width: 10;
        color: $warning;
    }

    HelpScreen .help-text {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical() as body:
            body.border_title = "nntm keys"
            for heading, rows in KEY_SECTIONS:
                yield Static(heading, classes="help-heading")
                for keys, text in rows:
                    with Horizontal():
                        yield Static(keys, classes="help-keys")
                        yield Static(text, classes="help-text")

    def on_key(self, event) -> None:
        """Close on any key."""
        event.stop()
        self.dismiss()
