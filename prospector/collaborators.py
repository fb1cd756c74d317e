"""
Prospector - Collaborator interfaces.

The core never talks to the generative service, the storage engine or the
display directly. It depends on these narrow capabilities, which callers
inject.
"""

import logging
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from prospector.models import Prospect, Service, UserProfile

logger = logging.getLogger("prospector.progress")


@runtime_checkable
class ProspectGenerator(Protocol):
    """Generative/search backend. Returns raw model text; may raise transport errors."""

    async def generate_prospect_batch(self, service: Service, sector: str,
                                      location: str) -> str:
        ...

    async def generate_email_draft(self, prospect: Prospect, service: Service,
                                   profile: UserProfile) -> str:
        ...


@runtime_checkable
class PersistenceCollaborator(Protocol):
    def load(self, key: str) -> List[dict]:
        ...

    def save(self, key: str, documents: List[dict]) -> None:
        ...


@runtime_checkable
class ProgressSink(Protocol):
    def report(self, current: int, total: int, label: str) -> None:
        ...


# ─── PROGRESS SINKS ──────────────────────────────────────────

class LoggingProgressSink:
    """Writes every progress step to the log."""

    def report(self, current: int, total: int, label: str) -> None:
        logger.info("Generating email %d of %d for %s...", current, total, label)


class ProgressTracker:
    """Keeps the latest progress snapshot (and history) for polling callers."""

    def __init__(self):
        self.history: List[Tuple[int, int, str]] = []
        self.message = ""

    def report(self, current: int, total: int, label: str) -> None:
        self.history.append((current, total, label))
        self.message = f"Generating email {current} of {total} for {label}..."

    @property
    def latest(self) -> Optional[Tuple[int, int, str]]:
        return self.history[-1] if self.history else None

    def reset(self) -> None:
        self.history = []
        self.message = ""

    def finish(self, summary: str) -> None:
        self.message = summary

    def to_dict(self) -> dict:
        current, total, label = self.latest or (0, 0, "")
        return {"current": current, "total": total, "label": label, "message": self.message}
