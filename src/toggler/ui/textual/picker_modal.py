"""
Feature Picker - Textual implementation
Shows feature rows with live filtering and multi-select
"""

from dataclasses import dataclass, field
from typing import Collection, Dict, List, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.widgets import Input, Label, Static

from toggler.core.config import PickerWindowConfig
from toggler.picker import ConfirmCallback, DisplayRow, FormatCallback


def filter_rows(rows: Sequence[DisplayRow], query: str) -> List[DisplayRow]:
    """Rows whose name or description contains the query (case-insensitive), in order."""
    query = query.strip().lower()
    if not query:
        return list(rows)
    return [
        row
        for row in rows
        if query in row.name.lower() or query in row.description.lower()
    ]


@dataclass
class PickerResult:
    """What the user confirmed: marked rows (in marking order) and the highlighted row."""

    selected: List[DisplayRow] = field(default_factory=list)
    current: Optional[DisplayRow] = None


class FeaturePickerApp(App[Optional[PickerResult]]):
    """
    Full-screen picker for toggling features.

    Features:
    - Live filtering as you type (name or description contains the query)
    - Keyboard navigation (↑↓, Enter, Esc)
    - Tab marks rows for a batch toggle
    """

    CSS = """
    #picker-container {
        width: 100%;
        height: auto;
        max-height: 30;
        border: thick $primary;
        padding: 0 1;
    }

    #search-input {
        margin-bottom: 1;
        border: solid $accent;
    }

    #rows-list {
        height: auto;
        max-height: 20;
    }

    .row-item {
        padding: 0 1;
        height: auto;
    }

    .row-current {
        background: $accent;
    }

    #help-text {
        margin-top: 1;
        color: $text-muted;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False, priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("tab", "toggle_mark", "Mark", show=False, priority=True),
    ]

    def __init__(
        self,
        rows: Sequence[DisplayRow],
        window: PickerWindowConfig,
        format: FormatCallback,
        highlights: Dict[str, str],
    ):
        super().__init__()
        self.all_rows = list(rows)
        self.filtered_rows = list(rows)
        self.window_config = window
        self.format_row = format
        self.highlights = highlights
        self.selected_index = 0
        self.marked: List[DisplayRow] = []
        self.title = window.title

    def compose(self) -> ComposeResult:
        with Container(id="picker-container"):
            yield Label(self.window_config.title)
            yield Input(placeholder=self.window_config.prompt, id="search-input")
            yield VerticalScroll(id="rows-list")
            yield Label("↑↓ navigate  Tab mark  Enter toggle  Esc cancel", id="help-text")

    def on_mount(self) -> None:
        self.query_one("#search-input", Input).focus()
        self._refresh_rows()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.filtered_rows = filter_rows(self.all_rows, event.value)
        self.selected_index = 0
        self._refresh_rows()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        current = self._current_row()
        if current is None and not self.marked:
            return
        self.exit(PickerResult(selected=list(self.marked), current=current))

    def _current_row(self) -> Optional[DisplayRow]:
        if 0 <= self.selected_index < len(self.filtered_rows):
            return self.filtered_rows[self.selected_index]
        return None

    def _render_row(self, row: DisplayRow, marked: Collection[int]) -> Text:
        text = Text()
        for segment, group in self.format_row(row, marked):
            text.append(segment, style=self.highlights.get(group, "") if group else "")
        return text

    def _refresh_rows(self) -> None:
        rows_list = self.query_one("#rows-list", VerticalScroll)
        rows_list.remove_children()

        if not self.filtered_rows:
            rows_list.mount(Static("No matching features", classes="row-item"))
            return

        marked = {row.index for row in self.marked}
        for idx, row in enumerate(self.filtered_rows):
            classes = "row-item"
            if idx == self.selected_index:
                classes += " row-current"
            rows_list.mount(Static(self._render_row(row, marked), classes=classes))

    def action_cursor_up(self) -> None:
        if self.filtered_rows:
            self.selected_index = max(0, self.selected_index - 1)
            self._refresh_rows()

    def action_cursor_down(self) -> None:
        if self.filtered_rows:
            self.selected_index = min(len(self.filtered_rows) - 1, self.selected_index + 1)
            self._refresh_rows()

    def action_toggle_mark(self) -> None:
        row = self._current_row()
        if row is None:
            return
        if row in self.marked:
            self.marked.remove(row)
        else:
            self.marked.append(row)
        self._refresh_rows()

    def action_cancel(self) -> None:
        self.exit(None)


class TextualPickerWidget:
    """PickerWidget that runs FeaturePickerApp and confirms after it closes."""

    def __init__(self, highlights: Dict[str, str]):
        self.highlights = highlights

    def show(
        self,
        rows: Sequence[DisplayRow],
        window: PickerWindowConfig,
        confirm: ConfirmCallback,
        format: FormatCallback,
    ) -> None:
        result = FeaturePickerApp(rows, window, format, self.highlights).run()
        if result is None:
            return
        confirm(result.selected, result.current)
