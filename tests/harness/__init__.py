"""Test harness for item-search.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, press_and_settle, make_item, ...
"""

from tests.harness.app_runner import run_app
from tests.harness.builders import (
    band_catalog,
    flea,
    make_item,
    make_item_dict,
    many_items,
)
from tests.harness.clock import FakeClock, FakeTimer
from tests.harness.interactions import (
    press_and_settle,
    type_and_settle,
    wait_past_debounce,
)
