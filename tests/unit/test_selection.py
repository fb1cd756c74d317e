"""
Unit tests for the selection tracker and the prospect board built on it.
"""

import pytest

from prospector.db.persistence import InMemoryPersistence
from prospector.db.stores import CallLogStore, ProspectStore
from prospector.listing.board import ProspectBoard
from prospector.listing.filter_sort import FilterCriteria
from prospector.listing.selection import SelectionTracker
from prospector.models import CallLog, CallOutcome


# ─── SELECTION TRACKER ────────────────────────────────────────

def test_toggle_flips_membership():
    selection = SelectionTracker()
    assert selection.toggle("a") is True
    assert "a" in selection
    assert selection.toggle("a") is False
    assert len(selection) == 0


def test_select_all_visible_is_a_half_toggle():
    selection = SelectionTracker({"A", "B"})
    assert selection.select_all_visible(["A", "C"]) == {"A", "B", "C"}
    assert selection.select_all_visible(["A", "C"]) == {"B"}


def test_all_visible_selected_false_when_nothing_visible():
    selection = SelectionTracker({"A"})
    assert selection.all_visible_selected([]) is False
    assert selection.select_all_visible([]) == {"A"}


def test_prune_drops_stale_ids():
    selection = SelectionTracker({"a", "b", "c"})
    assert selection.prune({"a", "c", "d"}) == {"b"}
    assert selection.ids == {"a", "c"}


def test_selected_in_keeps_collection_order(three_prospects):
    selection = SelectionTracker({"prs_c", "prs_a"})
    assert [p.id for p in selection.selected_in(three_prospects)] == ["prs_a", "prs_c"]


def test_ids_is_a_copy():
    selection = SelectionTracker({"a"})
    selection.ids.add("b")
    assert selection.ids == {"a"}


# ─── PROSPECT BOARD ───────────────────────────────────────────

@pytest.fixture
def board(three_prospects):
    persistence = InMemoryPersistence()
    store = ProspectStore(persistence)
    store.add(three_prospects)
    return ProspectBoard(store, CallLogStore(persistence))


def test_board_default_view_sorted_by_probability(board):
    assert board.visible_ids() == ["prs_b", "prs_c", "prs_a"]


def test_board_select_all_respects_filter(board):
    board.toggle("prs_a")
    board.set_view(FilterCriteria(min_probability=90))
    board.select_all_visible()
    assert board.selection.ids == {"prs_a", "prs_b"}
    assert board.all_visible_selected()


def test_board_toggle_unknown_id_raises(board):
    with pytest.raises(KeyError):
        board.toggle("prs_missing")


def test_selected_prospects_in_store_order(board):
    board.toggle("prs_c")
    board.toggle("prs_a")
    assert [p.id for p in board.selected_prospects()] == ["prs_a", "prs_c"]


def test_removal_elsewhere_prunes_selection(board):
    board.toggle("prs_a")
    board.toggle("prs_b")
    board.store.remove_many({"prs_a"})
    assert board.selection.ids == {"prs_b"}


def test_remove_selected_cascades_to_calls(board):
    board.call_store.add([CallLog(id="call_1", prospect_id="prs_a", outcome=CallOutcome.VOICEMAIL),
                          CallLog(id="call_2", prospect_id="prs_b", outcome=CallOutcome.OTHER)])
    board.toggle("prs_a")
    assert board.remove_selected() == {"prs_a"}
    assert board.store.ids() == {"prs_b", "prs_c"}
    assert board.call_store.ids() == {"call_2"}
    assert len(board.selection) == 0


def test_unknown_sort_key_on_board_falls_back(board):
    board.set_view(sort_by="colour")
    assert board.sort_by == "probability"
    board.set_view(sort_by="name")
    board.reset_view()
    assert board.sort_by == "probability"


def test_board_to_dict(board):
    board.set_view(FilterCriteria(sector="logistics"), "name")
    board.toggle("prs_b")
    data = board.to_dict()
    assert data["total"] == 3
    assert data["visible"] == 3
    assert data["selected"] == ["prs_b"]
    assert data["all_visible_selected"] is False
    assert data["filtered"] is True
    assert [p["company_name"] for p in data["prospects"]] == \
        ["Alpha Freight", "Beta Couriers", "Gamma Cargo"]
