"""Category side panel widget."""

from rich.markup import escape
from textual.widgets import Static


class CategoryPanel(Static):
    """Vertical list of known categories with the selected one highlighted."""

    def set_categories(self, categories: list[str], selected: int) -> None:
        lines = []
        for i, name in enumerate(categories):
            if i == selected:
                lines.append(f"[bold reverse cyan] {escape(name)} [/]")
            else:
                lines.append(f" {escape(name)}")
        self.update("\n".join(lines))
