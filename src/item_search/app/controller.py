"""Search controller — the toolkit-independent item search widget.

// [LAW:one-way-deps] Depends on core (catalog, matching, navigation) and
// debounce. Knows nothing about Textual.
// [LAW:single-enforcer] results() is the only path from catalog to rows.

One controller owns one QueryState. The catalog is read through an injected
accessor and never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from item_search.app.debounce import DEFAULT_INTERVAL_S, DebounceGate, SetTimer
from item_search.core import catalog as catalog_mod
from item_search.core import matching, navigation
from item_search.core.catalog import CatalogItem, SearchRecord
from item_search.core.navigation import NavKey, QueryState

logger = logging.getLogger(__name__)

CatalogAccessor = Callable[[], Sequence[CatalogItem] | None]
NavigateSink = Callable[[str], None]
ChangeSink = Callable[[str], None]


@dataclass(frozen=True)
class ResultRow:
    """One displayed result row."""

    icon: str
    name: str
    target: str
    active: bool


class SearchController:
    """Query/cursor state, memoized ranking and the sinks they drive."""

    def __init__(
        self,
        catalog: CatalogAccessor,
        navigate: NavigateSink,
        on_change: ChangeSink | None = None,
        *,
        seed: str | None = "",
        show_dropdown: bool = True,
        debounce_interval: float = DEFAULT_INTERVAL_S,
        set_timer: SetTimer | None = None,
        public_url: str = "",
        location: str | None = None,
    ):
        self._catalog = catalog
        self._navigate = navigate
        self._public_url = public_url
        self.state = QueryState.seeded(seed)
        self.show_dropdown = show_dropdown
        self.location = location
        self._gate = (
            DebounceGate(on_change, interval=debounce_interval, set_timer=set_timer)
            if on_change is not None
            else None
        )
        # Memo: catalog reference → projected records
        self._projected_for: object | None = None
        self._projected: list[SearchRecord] = []
        # Memo: (catalog reference, query, show_dropdown) → ranked results
        self._results_key: tuple | None = None
        self._results: list[SearchRecord] = []

    # ── Input ──

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def focused(self) -> bool:
        return self.state.focused

    @property
    def gate(self) -> DebounceGate | None:
        return self._gate

    def type_text(self, value: str) -> None:
        """The input's value changed. Display updates now; notification is debounced."""
        lowered = value.lower()
        self.state.query = lowered
        if self._gate is not None:
            self._gate.submit(lowered)

    def focus(self) -> None:
        self.state.focused = True

    def blur(self) -> None:
        self.state.focused = False

    def set_show_dropdown(self, show: bool) -> None:
        self.show_dropdown = show

    # ── Results ──

    def _current_catalog(self) -> Sequence[CatalogItem]:
        return self._catalog() or ()

    def records(self) -> list[SearchRecord]:
        """Projected records for the current catalog, recomputed only on a new reference."""
        current = self._current_catalog()
        if current is not self._projected_for:
            self._projected = catalog_mod.project(current, self._public_url)
            self._projected_for = current
            logger.debug("projected %d search records", len(self._projected))
        return self._projected

    def results(self) -> list[SearchRecord]:
        """Ranked results for the current query; empty when hidden or blank."""
        current = self._current_catalog()
        key = (id(current), self.state.query, self.show_dropdown)
        if key == self._results_key and current is self._projected_for:
            return self._results

        # [LAW:dataflow-not-control-flow] hidden dropdown and blank query
        # both produce the empty list without touching the projector.
        if not self.state.query or not self.show_dropdown:
            ranked: list[SearchRecord] = []
        else:
            ranked = matching.match(self.records(), self.state.query)
        self._results = ranked
        self._results_key = key
        return ranked

    def visible_results(self) -> list[SearchRecord]:
        return navigation.visible(self.results())

    def rows(self) -> list[ResultRow]:
        return [
            ResultRow(
                icon=record.icon_link,
                name=record.name,
                target=record.item_link,
                active=index == self.state.cursor,
            )
            for index, record in enumerate(self.visible_results())
        ]

    # ── Navigation keys ──

    def move_down(self) -> None:
        navigation.move_down(self.state)

    def move_up(self) -> None:
        navigation.move_up(self.state)

    def confirm(self) -> str | None:
        """Navigate to the record under the cursor, if any."""
        target = navigation.confirm(self.state, self.results())
        if target is None:
            return None
        logger.info("navigating to %s", target)
        try:
            self._navigate(target)
        except Exception:
            logger.exception("Navigation sink failed for %s", target)
        return target

    def handle_key(self, key: NavKey) -> str | None:
        if key is NavKey.CONFIRM:
            return self.confirm()
        navigation.apply_key(self.state, key, ())
        return None

    # ── Context / lifetime ──

    def on_location_changed(self, location: str | None) -> None:
        """The surrounding location moved: drop query and cursor, navigate nowhere."""
        if location == self.location:
            return
        self.location = location
        navigation.reset(self.state)
        if self._gate is not None:
            self._gate.cancel()

    def close(self) -> None:
        """Teardown: no change notification fires after this."""
        if self._gate is not None:
            self._gate.close()
