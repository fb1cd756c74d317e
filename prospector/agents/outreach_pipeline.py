"""
Prospector - Outreach Pipeline
Single-shot generation flows: prospect search and one-off email drafts.

Both run generator -> response extractor -> record validator. Extraction,
parse and schema errors go straight back to the caller (no automatic retry);
transport errors from the generator propagate unchanged.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from prospector.agents.bulk_runner import check_generation_preconditions
from prospector.agents.record_validator import validate_email_draft, validate_prospects
from prospector.agents.response_extractor import extract_array, extract_object
from prospector.errors import PreconditionError
from prospector.listing.filter_sort import sort_prospects
from prospector.listing.selection import SelectionTracker
from prospector.models import GeneratedEmail, Prospect, Service, UserProfile

logger = logging.getLogger("prospector.agents.outreach_pipeline")


@dataclass
class SearchOutcome:
    prospects: List[Prospect] = field(default_factory=list)
    rejected: int = 0
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "prospects": [p.model_dump(mode="json") for p in self.prospects],
            "rejected": self.rejected,
        }


def check_search_preconditions(service: Optional[Service], sector: str, location: str,
                               profile: Optional[UserProfile]) -> None:
    check_generation_preconditions(service, profile)
    if not (sector or "").strip() or not (location or "").strip():
        raise PreconditionError("Sector and location are required",
                                user_message="Please fill in both sector and location.")


async def search_prospects(generator, service: Optional[Service], sector: str,
                           location: str, profile: Optional[UserProfile]) -> SearchOutcome:
    """Run one prospect search batch.

    Returns:
        SearchOutcome with admissible prospects, highest hire probability first.

    Raises:
        PreconditionError: missing service, sector, location or profile name.
        ExtractionError / ParseError / SchemaError: unusable model response.
    """
    check_search_preconditions(service, sector, location, profile)

    start = time.monotonic()
    raw = await generator.generate_prospect_batch(service, sector.strip(), location.strip())
    payload = extract_array(raw)
    result = validate_prospects(payload)

    outcome = SearchOutcome(
        prospects=sort_prospects(result.records, "probability"),
        rejected=result.rejected,
        reasons=result.reasons,
    )
    logger.info("Search '%s' in '%s' for %s: %d prospect(s), %d rejected",
                sector, location, service.name, len(outcome.prospects), outcome.rejected,
                extra={"phase": "search",
                       "duration_ms": int((time.monotonic() - start) * 1000)})
    return outcome


async def draft_email(generator, prospect: Prospect, service: Optional[Service],
                      profile: Optional[UserProfile]) -> GeneratedEmail:
    """Generate a single email for one prospect. The result is not stored."""
    check_generation_preconditions(service, profile)
    raw = await generator.generate_email_draft(prospect, service, profile)
    draft = validate_email_draft(extract_object(raw))
    logger.info("Drafted email for %s", prospect.company_name,
                extra={"phase": "draft", "prospect_id": prospect.id})
    return GeneratedEmail.from_draft(prospect, service, draft)


class SearchSession:
    """Latest search results plus the user's picks among them.

    Results are transient: only save_selected() copies them into the store.
    """

    def __init__(self):
        self.results: List[Prospect] = []
        self.rejected = 0
        self.selection = SelectionTracker()

    async def search(self, generator, service, sector, location, profile) -> SearchOutcome:
        # Blocked searches keep the previous results; failed ones leave an empty list
        check_search_preconditions(service, sector, location, profile)
        self.results = []
        self.rejected = 0
        self.selection.clear()
        outcome = await search_prospects(generator, service, sector, location, profile)
        self.results = outcome.prospects
        self.rejected = outcome.rejected
        return outcome

    def result_ids(self) -> List[str]:
        return [p.id for p in self.results]

    def toggle(self, prospect_id: str) -> bool:
        if prospect_id not in self.result_ids():
            raise KeyError(prospect_id)
        return self.selection.toggle(prospect_id)

    def select_all(self):
        return self.selection.select_all_visible(self.result_ids())

    def save_selected(self, prospect_store) -> int:
        """Copy the selected results into the store. Returns how many were new."""
        chosen = self.selection.selected_in(self.results)
        if not chosen:
            return 0
        added = prospect_store.add(chosen)
        self.selection.clear()
        logger.info("Saved %d of %d selected prospect(s)", len(added), len(chosen))
        return len(added)
