"""
Prospector - Selection Tracker
The set of prospect ids a user has picked in one listing view.

select_all_visible() is a deliberate half-toggle: it only ever touches the
visible ids, so selections made under a different filter survive.
"""

from typing import Iterable, List, Set


class SelectionTracker:

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: Set[str] = set(ids)

    @property
    def ids(self) -> Set[str]:
        return set(self._ids)

    def __contains__(self, record_id) -> bool:
        return record_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def toggle(self, record_id: str) -> bool:
        """Flip membership. Returns True if the id is now selected."""
        if record_id in self._ids:
            self._ids.discard(record_id)
            return False
        self._ids.add(record_id)
        return True

    def all_visible_selected(self, visible_ids: Iterable[str]) -> bool:
        visible = set(visible_ids)
        return bool(visible) and visible <= self._ids

    def select_all_visible(self, visible_ids: Iterable[str]) -> Set[str]:
        """Deselect the visible ids if all are selected, otherwise select them all.

        Ids selected outside the visible set are never touched.
        """
        visible = set(visible_ids)
        if self.all_visible_selected(visible):
            self._ids -= visible
        else:
            self._ids |= visible
        return self.ids

    def clear(self) -> None:
        self._ids.clear()

    def prune(self, existing_ids: Iterable[str]) -> Set[str]:
        """Drop ids that are no longer in the collection. Returns the dropped ids."""
        stale = self._ids - set(existing_ids)
        self._ids -= stale
        return stale

    def discard_many(self, ids: Iterable[str]) -> None:
        self._ids -= set(ids)

    def selected_in(self, records: Iterable) -> List:
        """Selected records, in collection order."""
        return [r for r in records if r.id in self._ids]
