"""
Prospector - Prospect Board
The saved-prospects view: current filter + sort, and the selection over it.
"""

import logging
from typing import List, Set

from prospector.listing.filter_sort import DEFAULT_SORT, SORT_KEYS, FilterCriteria, filter_and_sort
from prospector.listing.selection import SelectionTracker
from prospector.models import Prospect

logger = logging.getLogger("prospector.listing.board")


class ProspectBoard:
    """Binds a ProspectStore to one listing view.

    The selection is pruned every time the store removes prospects, so it
    never points at records that no longer exist.
    """

    def __init__(self, prospect_store, call_store=None, sort_by: str = DEFAULT_SORT):
        self.store = prospect_store
        self.call_store = call_store
        self.criteria = FilterCriteria()
        self.sort_by = sort_by if sort_by in SORT_KEYS else DEFAULT_SORT
        self.selection = SelectionTracker()
        self.store.on_remove(self._on_store_remove)

    def _on_store_remove(self, removed_ids: Set[str]) -> None:
        self.selection.discard_many(removed_ids)

    def set_view(self, criteria: FilterCriteria = None, sort_by: str = None) -> None:
        self.criteria = criteria or FilterCriteria()
        if sort_by is not None:
            self.sort_by = sort_by if sort_by in SORT_KEYS else DEFAULT_SORT

    def reset_view(self) -> None:
        self.criteria = FilterCriteria()
        self.sort_by = DEFAULT_SORT

    def visible(self) -> List[Prospect]:
        return filter_and_sort(self.store.all(), self.criteria, self.sort_by)

    def visible_ids(self) -> List[str]:
        return [p.id for p in self.visible()]

    def toggle(self, prospect_id: str) -> bool:
        if prospect_id not in self.store:
            raise KeyError(prospect_id)
        return self.selection.toggle(prospect_id)

    def select_all_visible(self) -> Set[str]:
        return self.selection.select_all_visible(self.visible_ids())

    def all_visible_selected(self) -> bool:
        return self.selection.all_visible_selected(self.visible_ids())

    def selected_prospects(self) -> List[Prospect]:
        """Selected prospects in store order (the bulk runner's input order)."""
        self.selection.prune(self.store.ids())
        return self.selection.selected_in(self.store.all())

    def remove_selected(self) -> Set[str]:
        """Delete every selected prospect (and their call logs), then clear the selection."""
        removed = self.store.remove_many(self.selection.ids)
        if self.call_store is not None and removed:
            self.call_store.remove_for_prospects(removed)
        self.selection.clear()
        return removed

    def to_dict(self) -> dict:
        visible = self.visible()
        return {
            "prospects": [p.model_dump(mode="json") for p in visible],
            "visible": len(visible),
            "total": len(self.store),
            "selected": sorted(self.selection.ids),
            "all_visible_selected": self.selection.all_visible_selected(p.id for p in visible),
            "sort_by": self.sort_by,
            "filtered": not self.criteria.is_empty,
        }
