"""Query state and the keyboard navigation state machine.

State: cursor in [0, N) where N = min(len(results), MAX_VISIBLE_RESULTS).
N == 0 leaves the cursor at 0 and inert.

Transitions:
    down     cursor = min(cursor + 1, MAX_CURSOR)
    up       cursor = max(cursor - 1, 0)
    confirm  record at cursor → its item_link; cursor = 0, query = ""
             no record at cursor → no-op
    reset    cursor = 0, query = ""

The down cap is the fixed MAX_CURSOR rather than N - 1, so key-repeat can
never run past the last visible row even while results shrink.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from item_search.core.catalog import SearchRecord

MAX_VISIBLE_RESULTS = 10
MAX_CURSOR = MAX_VISIBLE_RESULTS - 1


class NavKey(Enum):
    DOWN = "down"
    UP = "up"
    CONFIRM = "enter"


@dataclass
class QueryState:
    """Transient per-widget search state."""

    query: str = ""
    cursor: int = 0
    focused: bool = False

    @classmethod
    def seeded(cls, seed: str | None) -> QueryState:
        return cls(query=(seed or "").lower())


def visible(results: Sequence[SearchRecord]) -> list[SearchRecord]:
    """The displayed slice of a ranked result list."""
    return list(results[:MAX_VISIBLE_RESULTS])


def move_down(state: QueryState) -> None:
    state.cursor = min(state.cursor + 1, MAX_CURSOR)


def move_up(state: QueryState) -> None:
    state.cursor = max(state.cursor - 1, 0)


def reset(state: QueryState) -> None:
    state.cursor = 0
    state.query = ""


def selected(state: QueryState, results: Sequence[SearchRecord]) -> SearchRecord | None:
    """Record under the cursor in the displayed list, or None."""
    shown = visible(results)
    if 0 <= state.cursor < len(shown):
        return shown[state.cursor]
    return None


def confirm(state: QueryState, results: Sequence[SearchRecord]) -> str | None:
    """Resolve the cursor to a navigation target.

    Returns the target and resets the state, or returns None and leaves the
    state untouched when no record sits under the cursor.
    """
    record = selected(state, results)
    if record is None:
        return None
    reset(state)
    return record.item_link


# [LAW:dataflow-not-control-flow] Cursor transitions as data.
_CURSOR_TRANSITIONS = {
    NavKey.DOWN: move_down,
    NavKey.UP: move_up,
}


def apply_key(
    state: QueryState, key: NavKey, results: Sequence[SearchRecord]
) -> str | None:
    """Apply one discrete key press. Returns a target only for CONFIRM."""
    if key is NavKey.CONFIRM:
        return confirm(state, results)
    _CURSOR_TRANSITIONS[key](state)
    return None
