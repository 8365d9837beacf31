"""Unit tests for the keyboard navigation state machine."""

import random

import pytest

from item_search.core.catalog import project
from item_search.core.navigation import (
    MAX_CURSOR,
    MAX_VISIBLE_RESULTS,
    NavKey,
    QueryState,
    apply_key,
    confirm,
    move_down,
    move_up,
    reset,
    selected,
    visible,
)
from tests.harness import make_item, many_items


def test_seeded_state_is_lowercase():
    state = QueryState.seeded("Bandage")
    assert state.query == "bandage"
    assert state.cursor == 0
    assert not state.focused
    assert QueryState.seeded(None).query == ""


def test_down_caps_at_nine_regardless_of_result_count():
    state = QueryState()
    for _ in range(25):
        move_down(state)
    assert state.cursor == MAX_CURSOR == 9


def test_up_floors_at_zero():
    state = QueryState(cursor=2)
    for _ in range(5):
        move_up(state)
    assert state.cursor == 0


def test_random_key_sequences_stay_in_bounds():
    rng = random.Random(1234)
    state = QueryState()
    for _ in range(2000):
        apply_key(state, rng.choice([NavKey.DOWN, NavKey.UP]), ())
        assert 0 <= state.cursor <= MAX_CURSOR


def test_visible_caps_at_ten():
    records = project(many_items(30))
    assert len(visible(records)) == MAX_VISIBLE_RESULTS
    assert visible(records) == records[:10]


class TestConfirm:
    def test_resolves_target_and_resets(self):
        records = project((make_item("Gas analyzer"),))
        state = QueryState(query="gas", cursor=0)
        assert confirm(state, records) == "/item/gas-analyzer"
        assert state.query == ""
        assert state.cursor == 0

    def test_uses_cursor_row(self):
        records = project(many_items(5))
        state = QueryState(query="bolt", cursor=3)
        assert confirm(state, records) == "/item/bolt-3"

    def test_no_results_is_noop(self):
        state = QueryState(query="zzz", cursor=0)
        assert confirm(state, []) is None
        assert state.query == "zzz"

    def test_cursor_past_end_is_noop(self):
        # Results shrank below the cursor: no clamp, nothing happens
        records = project(many_items(2))
        state = QueryState(query="bolt", cursor=5)
        assert selected(state, records) is None
        assert confirm(state, records) is None
        assert state.cursor == 5
        assert state.query == "bolt"

    def test_only_visible_rows_are_confirmable(self):
        records = project(many_items(30))
        state = QueryState(query="bolt", cursor=MAX_CURSOR)
        assert confirm(state, records) == "/item/bolt-9"

    def test_apply_key_confirm(self):
        records = project((make_item("Bolt"),))
        state = QueryState(query="bo")
        assert apply_key(state, NavKey.CONFIRM, records) == "/item/bolt"
        assert state.query == ""


@pytest.mark.parametrize("cursor", [0, 4, 9])
def test_reset_clears_query_and_cursor(cursor):
    state = QueryState(query="xyz", cursor=cursor, focused=True)
    reset(state)
    assert (state.query, state.cursor) == ("", 0)
    assert state.focused
