"""
Prospector - Record stores.

Each store owns the authoritative ordered collection for one key of the
injected persistence collaborator. Mutations are write-through: the new list is
saved first and only swapped in once the save returns, so a failing save leaves
the store exactly as it was.
"""

import logging
from typing import Callable, Iterable, List, Optional, Set

from pydantic import ValidationError

from prospector.models import CallLog, GeneratedEmail, Prospect, Service, UserProfile

logger = logging.getLogger("prospector.db.stores")


class RecordStore:
    """Ordered, id-unique collection persisted under a single key."""

    key = ""
    model = None

    def __init__(self, persistence):
        self.persistence = persistence
        self._records = self._load()
        self._remove_listeners: List[Callable[[Set[str]], None]] = []

    def _load(self) -> list:
        records, seen = [], set()
        for doc in self.persistence.load(self.key):
            try:
                record = self.model.model_validate(doc)
            except ValidationError as e:
                logger.warning("Skipping unreadable %s document: %s", self.key, e.errors()[:1])
                continue
            if record.id in seen:
                continue
            seen.add(record.id)
            records.append(record)
        return records

    def _commit(self, records: list) -> None:
        self.persistence.save(self.key, [r.model_dump(mode="json") for r in records])
        self._records = records

    # ─── READ ─────────────────────────────────────────────────

    def all(self) -> list:
        return list(self._records)

    def get(self, record_id: str):
        for r in self._records:
            if r.id == record_id:
                return r
        return None

    def ids(self) -> Set[str]:
        return {r.id for r in self._records}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id) -> bool:
        return any(r.id == record_id for r in self._records)

    # ─── WRITE ────────────────────────────────────────────────

    def add(self, batch: Iterable) -> list:
        """Insert every record whose id is new. Duplicates are skipped, never raised.

        Returns the records actually added, in batch order.
        """
        batch = list(batch)
        existing = self.ids()
        added = []
        for record in batch:
            if record.id in existing:
                continue
            existing.add(record.id)
            added.append(record)
        if added:
            self._commit(self._records + added)
        logger.info("Added %d %s (%d skipped as duplicates)",
                    len(added), self.key, len(batch) - len(added))
        return added

    def remove_many(self, ids: Iterable[str]) -> Set[str]:
        """Remove all records whose id is in ids. Unknown ids are ignored."""
        ids = set(ids)
        kept = [r for r in self._records if r.id not in ids]
        removed = {r.id for r in self._records if r.id in ids}
        if removed:
            self._commit(kept)
            logger.info("Removed %d %s", len(removed), self.key)
            for listener in self._remove_listeners:
                listener(removed)
        return removed

    def update(self, record):
        """Replace the record with the same id wholesale. No-op when the id is absent."""
        for i, r in enumerate(self._records):
            if r.id == record.id:
                records = list(self._records)
                records[i] = record
                self._commit(records)
                return record
        logger.debug("Update ignored, %s id %s not found", self.key, record.id)
        return None

    def on_remove(self, callback: Callable[[Set[str]], None]) -> None:
        """Register a callback that receives the ids removed by remove_many()."""
        self._remove_listeners.append(callback)


class ProspectStore(RecordStore):
    key = "prospects"
    model = Prospect


class EmailStore(RecordStore):
    key = "emails"
    model = GeneratedEmail

    def for_prospect(self, prospect_id: str) -> List[GeneratedEmail]:
        return [e for e in self._records if e.recipient.id == prospect_id]


class ServiceStore(RecordStore):
    key = "services"
    model = Service


class CallLogStore(RecordStore):
    key = "calls"
    model = CallLog

    def for_prospect(self, prospect_id: str) -> List[CallLog]:
        """Calls for one prospect, most recent first."""
        calls = [c for c in self._records if c.prospect_id == prospect_id]
        return sorted(calls, key=lambda c: c.called_at, reverse=True)

    def remove_for_prospects(self, prospect_ids: Iterable[str]) -> Set[str]:
        prospect_ids = set(prospect_ids)
        return self.remove_many(c.id for c in self._records if c.prospect_id in prospect_ids)


class ProfileStore:
    """Single sender profile, persisted as a one-element list."""

    key = "profile"

    def __init__(self, persistence):
        self.persistence = persistence
        docs = persistence.load(self.key)
        self._profile = UserProfile.model_validate(docs[0]) if docs else UserProfile()

    def get(self) -> UserProfile:
        return self._profile

    def save(self, profile: UserProfile) -> UserProfile:
        self.persistence.save(self.key, [profile.model_dump(mode="json")])
        self._profile = profile
        return profile


def find_service(services: ServiceStore, service_id: Optional[str]) -> Optional[Service]:
    if not service_id:
        return None
    return services.get(service_id)
