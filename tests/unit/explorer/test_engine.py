from __future__ import annotations

import math

import pytest

from folio.explorer import ALL_TYPES, Explorer, SortMode
from folio.explorer.engine import filter_items, to_timestamp
from tests.helpers.content import make_item


@pytest.fixture
def items():
    return [
        make_item("soc", title="SOC automation", date="2024-03-01", type="cyber", summary="Alert triage."),
        make_item("leaf", title="Leaf disease classifier", date="2023-11-20", type="ai"),
        make_item("ir", title="Incident response playbook", date="2024-06-01", type="cyber"),
        make_item("flows", title="Automation pipeline", date="2022-01-15", type="automation"),
        make_item("shots", title="Street photography", date="2024-01-10", type="photo"),
    ]


def ids(results):
    return [item.id for item in results]


# --- dates ------------------------------------------------------------------


def test_to_timestamp():
    assert to_timestamp("2024-01-01") < to_timestamp("2024-01-02")
    assert to_timestamp(None) == -math.inf
    assert to_timestamp("") == -math.inf


def test_unparseable_date_sorts_as_earliest(caplog):
    assert to_timestamp("next spring") == -math.inf
    assert "next spring" in caplog.text


# --- filter / sort ------------------------------------------------------------


def test_default_view_is_newest_first(items):
    explorer = Explorer(items)

    assert ids(explorer.results) == ["ir", "soc", "shots", "leaf", "flows"]
    assert explorer.state.sort_mode is SortMode.NEWEST
    assert explorer.state.selected_type == ALL_TYPES


def test_select_type_then_all_restores(items):
    explorer = Explorer(items)

    explorer.select_type("cyber")
    assert explorer.count == 2
    assert {item.type for item in explorer.results} == {"cyber"}

    explorer.select_type("all")
    assert explorer.count == 5


def test_unknown_type_yields_nothing(items):
    explorer = Explorer(items)

    explorer.select_type("woodworking")

    assert explorer.results == ()
    assert explorer.view().summary == "Showing 0 items"


def test_oldest_sort(items):
    explorer = Explorer(items)

    explorer.set_sort("oldest")

    assert ids(explorer.results) == ["flows", "leaf", "shots", "soc", "ir"]


def test_missing_date_sorts_last_then_first():
    dated = [make_item("a", date="2024-01-01"), make_item("undated"), make_item("b", date="2023-01-01")]
    explorer = Explorer(dated)

    assert ids(explorer.results)[-1] == "undated"

    explorer.set_sort(SortMode.OLDEST)
    assert ids(explorer.results)[0] == "undated"


@pytest.mark.parametrize("mode", list(SortMode))
def test_equal_dates_keep_input_order(mode):
    same_day = [make_item(name, date="2024-02-02") for name in ("c", "a", "b")]

    assert ids(filter_items(same_day, sort_mode=mode)) == ["c", "a", "b"]


def test_query_typo_still_matches(items):
    explorer = Explorer(items)

    explorer.set_query("automaton")
    assert "flows" in ids(explorer.results)

    explorer.set_query("zzzzz")
    assert explorer.results == ()


def test_search_results_are_date_sorted(items):
    explorer = Explorer(items)

    explorer.set_query("automation")

    assert ids(explorer.results) == ["soc", "flows"]


def test_whitespace_query_is_no_query(items):
    explorer = Explorer(items)

    explorer.set_query("   ")

    assert explorer.count == 5
    assert not explorer.has_active_filters


def test_search_then_type_filter(items):
    explorer = Explorer(items)
    explorer.set_query("automation")
    explorer.select_type("automation")

    assert ids(explorer.results) == ["flows"]


def test_type_filter_never_grows_results(items):
    explorer = Explorer(items)
    explorer.set_query("playbook")
    unfiltered = explorer.count

    for option in explorer.type_options:
        explorer.select_type(option)
        assert explorer.count <= unfiltered


def test_empty_item_list():
    explorer = Explorer([])

    explorer.set_query("anything")

    assert explorer.results == ()
    assert explorer.type_options == [ALL_TYPES]


# --- derived state ------------------------------------------------------------


def test_type_options(items):
    assert Explorer(items).type_options == ["all", "ai", "automation", "cyber", "photo"]


def test_has_active_filters(items):
    explorer = Explorer(items)
    assert not explorer.has_active_filters

    explorer.set_sort("oldest")
    assert explorer.has_active_filters

    explorer.set_sort("newest")
    explorer.select_type("ai")
    assert explorer.has_active_filters


def test_default_sort_can_be_oldest(items):
    explorer = Explorer(items, default_sort="oldest")

    assert ids(explorer.results)[0] == "flows"
    assert not explorer.has_active_filters


def test_clear_resets_data_state(items):
    explorer = Explorer(items)
    explorer.set_query("playbook")
    explorer.select_type("cyber")
    explorer.set_sort("oldest")

    explorer.clear()

    assert explorer.state.query == ""
    assert explorer.state.selected_type == ALL_TYPES
    assert explorer.state.sort_mode is SortMode.NEWEST
    assert ids(explorer.results) == ids(Explorer(items).results)


def test_view_summary(items):
    explorer = Explorer(items)
    assert explorer.view().summary == "Showing 5 items"

    explorer.set_query("street photography")
    assert explorer.view().count == 1
    assert explorer.view().summary == "Showing 1 item"


def test_explorers_do_not_share_state(items):
    first = Explorer(items)
    second = Explorer(items)

    first.select_type("ai")

    assert second.count == 5


# --- filter panel -------------------------------------------------------------


def test_panel_toggle_and_outside_click(items):
    explorer = Explorer(items)
    assert explorer.panel_open is False

    explorer.toggle_panel()
    assert explorer.panel_open is True

    explorer.pointer_down(inside_panel=True)
    assert explorer.panel_open is True

    explorer.pointer_down(inside_panel=False)
    assert explorer.panel_open is False

    explorer.pointer_down(inside_panel=False)
    assert explorer.panel_open is False


def test_apply_closes_panel_and_keeps_results(items):
    explorer = Explorer(items)
    explorer.toggle_panel()
    explorer.select_type("cyber")

    explorer.apply()

    assert explorer.panel_open is False
    assert explorer.count == 2


def test_clear_leaves_panel_open(items):
    explorer = Explorer(items)
    explorer.toggle_panel()
    explorer.select_type("cyber")

    explorer.clear()

    assert explorer.panel_open is True
    assert explorer.count == 5


def test_panel_does_not_change_results(items):
    explorer = Explorer(items)
    before = explorer.results

    explorer.toggle_panel()
    explorer.toggle_panel()
    explorer.close_panel()

    assert explorer.results == before
