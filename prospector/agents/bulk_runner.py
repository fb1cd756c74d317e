"""
Prospector - Bulk Runner
Generates one outreach email per selected prospect, strictly one at a time.

State machine per batch: IDLE -> RUNNING -> COMPLETED, or IDLE -> REJECTED when
a precondition fails (nothing is generated in that case).

Ordering guarantees:
- progress for item i is reported (and the event loop gets a turn) before the
  generation call for item i is awaited
- item i is fully stored or counted as failed before item i+1 starts
- never more than one generation call in flight for a batch

A failing item is logged, counted and skipped; it never aborts the batch.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from prospector.agents.error_handler import log_pipeline_error
from prospector.agents.record_validator import validate_email_draft
from prospector.agents.response_extractor import extract_object
from prospector.db.connection import gen_id
from prospector.errors import BulkRunInProgressError, ItemFailure, PreconditionError
from prospector.models import GeneratedEmail, Prospect, Service, UserProfile

logger = logging.getLogger("prospector.agents.bulk_runner")


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    REJECTED = "rejected"


@dataclass
class BulkReport:
    batch_id: str
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    email_ids: List[str] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)
    duration_ms: int = 0

    def summary(self) -> str:
        text = f"{self.succeeded} of {self.attempted} emails generated and saved."
        if self.failed:
            text += f" {self.failed} failed."
        return text

    def to_dict(self) -> dict:
        return {
            "batch_id": self.batch_id,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "email_ids": list(self.email_ids),
            "failures": [f.to_dict() for f in self.failures],
            "duration_ms": self.duration_ms,
            "summary": self.summary(),
        }


def check_generation_preconditions(service: Optional[Service], profile: Optional[UserProfile]):
    """Shared gate for every generation operation. Raises PreconditionError."""
    if service is None:
        raise PreconditionError("No service selected",
                                user_message="Please select a service before generating.")
    if profile is None or not profile.is_complete:
        raise PreconditionError("Profile name is missing",
                                user_message="Please set up your profile name before generating.")


class BulkRunner:
    """Sequential email generation over a list of target prospects.

    Usage:
        runner = BulkRunner(generator, email_store, progress=ProgressTracker())
        report = await runner.run(board.selected_prospects(), service, profile,
                                  selection=board.selection)
    """

    def __init__(self, generator, email_store, progress=None):
        self.generator = generator
        self.email_store = email_store
        self.progress = progress
        self.state = RunState.IDLE
        self.last_report: Optional[BulkReport] = None
        self.last_error: Optional[PreconditionError] = None

    @property
    def is_running(self) -> bool:
        return self.state == RunState.RUNNING

    def _reject(self, error: PreconditionError):
        self.state = RunState.REJECTED
        self.last_error = error
        logger.warning("Bulk run rejected: %s", error)
        raise error

    async def run(self, targets: Sequence[Prospect], service: Optional[Service],
                  profile: Optional[UserProfile], selection=None) -> BulkReport:
        """Run one batch. Raises PreconditionError before any generation if inputs are missing."""
        if self.is_running:
            raise BulkRunInProgressError("A bulk run is already active")

        targets = list(targets or [])
        try:
            check_generation_preconditions(service, profile)
        except PreconditionError as e:
            self._reject(e)
        if not targets:
            self._reject(PreconditionError(
                "No prospects selected",
                user_message="Please select at least one prospect."))

        self.state = RunState.RUNNING
        self.last_error = None
        report = BulkReport(batch_id=gen_id("bulk"))
        total = len(targets)
        start = time.monotonic()
        logger.info("Bulk run %s started: %d prospect(s), service=%s",
                    report.batch_id, total, service.name,
                    extra={"batch_id": report.batch_id, "phase": "bulk_email"})

        try:
            for index, prospect in enumerate(targets, start=1):
                if self.progress is not None:
                    self.progress.report(index, total, prospect.display_name)
                await asyncio.sleep(0)

                report.attempted += 1
                try:
                    email = await self._generate_one(prospect, service, profile)
                    self.email_store.add([email])
                except Exception as e:
                    entry = log_pipeline_error(
                        phase="bulk_email", error=e, batch_id=report.batch_id,
                        prospect_id=prospect.id, item_index=index,
                        context={"company": prospect.company_name},
                    )
                    failure = ItemFailure(index, prospect.id, cause=e,
                                          batch_id=report.batch_id, details=entry)
                    report.failed += 1
                    report.failures.append(failure)
                    continue

                report.succeeded += 1
                report.email_ids.append(email.id)
        except BaseException:
            # Cancellation or interpreter shutdown: don't leave the runner stuck
            self.state = RunState.IDLE
            raise

        report.duration_ms = int((time.monotonic() - start) * 1000)
        if selection is not None:
            selection.clear()
        self.state = RunState.COMPLETED
        self.last_report = report
        if self.progress is not None and hasattr(self.progress, "finish"):
            self.progress.finish(report.summary())

        logger.info("Bulk run %s completed: %s", report.batch_id, report.summary(),
                    extra={"batch_id": report.batch_id, "phase": "bulk_email",
                           "duration_ms": report.duration_ms})
        return report

    async def _generate_one(self, prospect: Prospect, service: Service,
                            profile: UserProfile) -> GeneratedEmail:
        raw = await self.generator.generate_email_draft(prospect, service, profile)
        draft = validate_email_draft(extract_object(raw))
        return GeneratedEmail.from_draft(prospect, service, draft)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "last_report": self.last_report.to_dict() if self.last_report else None,
            "last_error": self.last_error.user_message if self.last_error else None,
        }
