"""
Prospector - Workspace
Explicit wiring of the stores, views and runners one user works with.

Nothing here is global: build a Workspace and hand it to whoever needs it
(the API app, a script, a test).
"""

import logging

from prospector.agents.bulk_runner import BulkRunner
from prospector.agents.outreach_pipeline import SearchSession
from prospector.collaborators import ProgressTracker
from prospector.db.persistence import InMemoryPersistence, SQLitePersistence
from prospector.db.stores import CallLogStore, EmailStore, ProfileStore, ProspectStore, ServiceStore
from prospector.listing.board import ProspectBoard

logger = logging.getLogger("prospector.workspace")


class Workspace:

    def __init__(self, persistence, generator=None, default_sort: str = None):
        from prospector.config import DEFAULT_SORT

        self.persistence = persistence
        self.generator = generator
        self.prospects = ProspectStore(persistence)
        self.emails = EmailStore(persistence)
        self.services = ServiceStore(persistence)
        self.calls = CallLogStore(persistence)
        self.profile = ProfileStore(persistence)
        self.board = ProspectBoard(self.prospects, self.calls,
                                   sort_by=default_sort or DEFAULT_SORT)
        self.search = SearchSession()
        self.progress = ProgressTracker()
        self.runner = BulkRunner(generator, self.emails, progress=self.progress)
        logger.info("Workspace ready: %d prospect(s), %d email(s), %d service(s)",
                    len(self.prospects), len(self.emails), len(self.services))

    @classmethod
    def in_memory(cls, generator=None) -> "Workspace":
        return cls(InMemoryPersistence(), generator=generator)

    @classmethod
    def sqlite(cls, db_path: str = None, generator=None) -> "Workspace":
        return cls(SQLitePersistence(db_path), generator=generator)

    def set_generator(self, generator) -> None:
        self.generator = generator
        self.runner.generator = generator
