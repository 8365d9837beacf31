"""ItemSearchApp — standalone terminal front end for the item search widget.

The app plays the embedding page: it owns the current location, acts as the
navigation sink and forwards location changes to the widget. Routing proper
is out of scope; a location is just a path string shown in the header line.
"""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from item_search.app.catalog_source import FileCatalogSource
from item_search.core.catalog import to_search_record
from item_search.tui.search_widget import FOCUS_HOTKEY, ItemSearch

logger = logging.getLogger(__name__)

HOME_LOCATION = "/"
# How often the catalog file is checked for changes, in seconds
CATALOG_POLL_S = 5.0


# App's own ctrl+q quit binding would shadow the focus hotkey
class ItemSearchApp(App, inherit_bindings=False):
    """Search a catalog file and "navigate" to items."""

    # Focus is decided by ItemSearch (auto_focus, narrow terminals)
    AUTO_FOCUS = None

    BINDINGS = [
        Binding(FOCUS_HOTKEY, "focus_search", "Search", priority=True),
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("escape", "go_home", "Home"),
    ]

    CSS = """
    #location {
        height: 1;
        padding: 0 1;
        background: $panel;
    }

    #item-detail {
        padding: 1 2;
    }
    """

    def __init__(
        self,
        source: FileCatalogSource,
        *,
        default_value: str | None = None,
        placeholder: str | None = None,
        show_dropdown: bool = True,
        debounce_interval: float = 0.3,
        public_url: str = "",
        poll_catalog: bool = True,
    ):
        super().__init__()
        self.source = source
        self.location = HOME_LOCATION
        self.last_query: str | None = None
        self.detail = Text("")
        self._search_kwargs = dict(
            default_value=default_value,
            placeholder=placeholder,
            show_dropdown=show_dropdown,
            debounce_interval=debounce_interval,
            public_url=public_url,
        )
        self._poll_catalog = poll_catalog

    def compose(self) -> ComposeResult:
        yield Static(self.location, id="location")
        yield ItemSearch(self.source, auto_focus=True, id="item-search", **self._search_kwargs)
        yield Static("", id="item-detail")

    def on_mount(self) -> None:
        self.search_widget.controller.location = self.location
        if self._poll_catalog:
            self.set_interval(CATALOG_POLL_S, self._check_catalog)

    @property
    def search_widget(self) -> ItemSearch:
        return self.query_one("#item-search", ItemSearch)

    # ── Location ──

    def go_to(self, location: str) -> None:
        """Navigation sink: change location and let the widget reset."""
        self.location = location
        self.query_one("#location", Static).update(location)
        self.detail = self._describe(location)
        self.query_one("#item-detail", Static).update(self.detail)
        self.search_widget.set_location(location)

    def _describe(self, location: str) -> Text:
        prefix = "/item/"
        if not location.startswith(prefix):
            return Text("")
        slug = location[len(prefix):]
        # Raw catalog lookup; the projector stays idle while the dropdown is hidden
        item = next((i for i in self.source() if i.normalized_name == slug), None)
        if item is None:
            return Text(f"Unknown item: {slug}", style="dim")
        record = to_search_record(item, self._search_kwargs["public_url"])
        text = Text()
        text.append(record.name, style="bold")
        text.append(f"\n{record.short_name}", style="dim")
        text.append(f"\nicon: {record.icon_link}")
        if record.trader_name:
            text.append(f"\nsell to {record.trader_name}: {record.trader_price_rub}")
        text.append(f"\ninsta profit: {record.insta_profit}")
        return text

    # ── Messages / actions ──

    def on_item_search_selected(self, message: ItemSearch.Selected) -> None:
        self.go_to(message.target)

    def on_item_search_changed(self, message: ItemSearch.Changed) -> None:
        self.last_query = message.value
        logger.debug("debounced query %r", message.value)

    def action_focus_search(self) -> None:
        self.search_widget.focus_input()

    def action_go_home(self) -> None:
        if self.location != HOME_LOCATION:
            self.go_to(HOME_LOCATION)

    def _check_catalog(self) -> None:
        if self.source.reload_if_changed():
            self.search_widget.refresh_results()
