"""Item search widget — input line plus a keyboard-navigable result list.

Not a view of its own state: SearchController owns query/cursor/results and
this widget renders them. Key handling:

    printable / backspace   Input edits → controller.type_text
    down / up               controller.move_down / move_up
    enter                   Input.Submitted → controller.confirm

Debounce timers are created with Widget.set_timer, so they die with the
widget; on_unmount closes the gate explicitly as well.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

from item_search.app.controller import CatalogAccessor, ResultRow, SearchController
from item_search.app.debounce import DEFAULT_INTERVAL_S
from item_search.io.settings import DEFAULT_PLACEHOLDER

logger = logging.getLogger(__name__)

FOCUS_HOTKEY = "ctrl+q"
# Terminals at or below this width do not auto-focus the input
NARROW_WIDTH = 60

_ACTIVE_MARKER = "› "
_INACTIVE_MARKER = "  "


def render_rows(rows: Sequence[ResultRow]) -> Text:
    """Render result rows as Rich text, active row highlighted."""
    text = Text()
    for index, row in enumerate(rows):
        if index:
            text.append("\n")
        style = "bold reverse" if row.active else ""
        text.append(_ACTIVE_MARKER if row.active else _INACTIVE_MARKER, style=style)
        text.append(row.name, style=style)
        text.append(f"  {row.icon}", style="dim")
    return text


class ItemSearch(Widget):
    """Search box over a shared, read-only item catalog."""

    DEFAULT_CSS = """
    ItemSearch {
        height: auto;
        padding: 0 1;
    }

    ItemSearch #search-tip {
        color: $text-muted;
        height: 1;
    }

    ItemSearch #search-results {
        height: auto;
        max-height: 10;
        border-left: solid $accent;
    }
    """

    class Changed(Message):
        """Posted with the debounced, lowercased query."""

        def __init__(self, item_search: ItemSearch, value: str) -> None:
            self.item_search = item_search
            self.value = value
            super().__init__()

        @property
        def control(self) -> ItemSearch:
            return self.item_search

    class Selected(Message):
        """Posted when a result is confirmed."""

        def __init__(self, item_search: ItemSearch, target: str) -> None:
            self.item_search = item_search
            self.target = target
            super().__init__()

        @property
        def control(self) -> ItemSearch:
            return self.item_search

    def __init__(
        self,
        catalog: CatalogAccessor,
        *,
        navigate: Callable[[str], None] | None = None,
        default_value: str | None = None,
        placeholder: str | None = None,
        auto_focus: bool = False,
        show_dropdown: bool = True,
        notify_changes: bool = True,
        debounce_interval: float = DEFAULT_INTERVAL_S,
        public_url: str = "",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._external_navigate = navigate
        self.placeholder = placeholder or DEFAULT_PLACEHOLDER
        self.auto_focus = auto_focus
        self.controller = SearchController(
            catalog,
            self._navigate,
            self._post_changed if notify_changes else None,
            seed=default_value,
            show_dropdown=show_dropdown,
            debounce_interval=debounce_interval,
            set_timer=self._set_timer,
            public_url=public_url,
        )

    # ── Composition / lifetime ──

    def compose(self) -> ComposeResult:
        yield Input(
            value=self.controller.query,
            placeholder=self.placeholder,
            id="search-input",
        )
        yield Static(FOCUS_HOTKEY, id="search-tip")
        yield Static("", id="search-results")

    def on_mount(self) -> None:
        if self.auto_focus and self.app.size.width > NARROW_WIDTH:
            self.focus_input()
        self.refresh_results()

    def on_unmount(self) -> None:
        self.controller.close()

    def _set_timer(self, delay: float, callback: Callable[[], None]):
        return self.set_timer(delay, callback)

    # ── Sinks ──

    def _post_changed(self, value: str) -> None:
        self.post_message(self.Changed(self, value))

    def _navigate(self, target: str) -> None:
        self.post_message(self.Selected(self, target))
        if self._external_navigate is not None:
            self._external_navigate(target)

    # ── Public API ──

    @property
    def input(self) -> Input:
        return self.query_one("#search-input", Input)

    def focus_input(self) -> None:
        input_widget = self.input
        input_widget.scroll_visible()
        input_widget.focus()

    def set_location(self, location: str | None) -> None:
        """The enclosing location changed; clear query and cursor."""
        self.controller.on_location_changed(location)
        self._sync_input()
        self.refresh_results()

    def set_show_dropdown(self, show: bool) -> None:
        self.controller.set_show_dropdown(show)
        self.refresh_results()

    def refresh_results(self) -> None:
        """Re-render rows, e.g. after the catalog reference changed."""
        results = self.query_one("#search-results", Static)
        results.display = self.controller.show_dropdown and bool(self.controller.query)
        results.update(render_rows(self.controller.rows()))
        self.query_one("#search-tip", Static).display = not self.controller.focused

    def _sync_input(self) -> None:
        input_widget = self.input
        if input_widget.value != self.controller.query:
            input_widget.value = self.controller.query

    # ── Events ──

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        lowered = event.value.lower()
        if lowered == self.controller.query:
            # Echo of a programmatic value update
            self.refresh_results()
            return
        if event.value != lowered:
            # Show lowercase; the resulting Changed echo is skipped above
            self.controller.type_text(lowered)
            event.input.value = lowered
            return
        self.controller.type_text(lowered)
        self.refresh_results()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self.controller.confirm() is not None:
            self._sync_input()
        self.refresh_results()

    def on_key(self, event: events.Key) -> None:
        if event.key == "down":
            event.stop()
            event.prevent_default()
            self.controller.move_down()
            self.refresh_results()
        elif event.key == "up":
            event.stop()
            event.prevent_default()
            self.controller.move_up()
            self.refresh_results()

    def on_descendant_focus(self, event) -> None:
        self.controller.focus()
        self.refresh_results()

    def on_descendant_blur(self, event) -> None:
        self.controller.blur()
        self.refresh_results()
