"""
Prospector - Record Validator
Checks extracted payloads against the prospect and email-draft schemas.

Prospect batches are validated element by element: a malformed element is
dropped and counted, the rest of the batch survives. Email drafts are all or
nothing.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List

from pydantic import ValidationError

from prospector.config import MIN_HIRE_PROBABILITY
from prospector.db.connection import gen_id
from prospector.errors import SchemaError
from prospector.models import EmailDraft, Prospect, utc_now

logger = logging.getLogger("prospector.agents.record_validator")


@dataclass
class ValidationResult:
    records: List[Prospect] = field(default_factory=list)
    rejected: int = 0
    reasons: List[str] = field(default_factory=list)

    @property
    def accepted(self) -> int:
        return len(self.records)


def _describe(err: ValidationError) -> str:
    first = err.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ())) or "record"
    return f"{loc}: {first.get('msg', 'invalid')}"


def validate_prospects(payload: Any, min_probability: int = None,
                       now: datetime = None) -> ValidationResult:
    """Validate a search batch.

    Args:
        payload: The extracted JSON value; must be a list.
        min_probability: Scores at or below this are rejected (default from config).
        now: Timestamp stamped on records that carry no created_at.

    Returns:
        ValidationResult with the admissible prospects in payload order and a
        count (plus reasons) of everything rejected.

    Raises:
        SchemaError: if payload is not a list at all.
    """
    if not isinstance(payload, list):
        raise SchemaError(f"Expected a JSON array of prospects, got {type(payload).__name__}")

    threshold = MIN_HIRE_PROBABILITY if min_probability is None else min_probability
    stamp = now or utc_now()
    result = ValidationResult()
    seen_ids = set()

    for i, element in enumerate(payload):
        if not isinstance(element, dict):
            result.rejected += 1
            result.reasons.append(f"[{i}] not an object")
            continue

        data = dict(element)
        if not data.get("id"):
            data["id"] = gen_id("prs")
        data.setdefault("created_at", stamp)

        try:
            prospect = Prospect.model_validate(data)
        except ValidationError as e:
            result.rejected += 1
            result.reasons.append(f"[{i}] {_describe(e)}")
            continue

        if prospect.hire_probability <= threshold:
            result.rejected += 1
            result.reasons.append(
                f"[{i}] hire_probability {prospect.hire_probability} <= {threshold}")
            continue

        if prospect.id in seen_ids:
            result.rejected += 1
            result.reasons.append(f"[{i}] duplicate id {prospect.id}")
            continue

        seen_ids.add(prospect.id)
        result.records.append(prospect)

    if result.rejected:
        logger.warning("Rejected %d of %d prospect record(s): %s",
                       result.rejected, len(payload), "; ".join(result.reasons[:5]))
    return result


def validate_email_draft(payload: Any) -> EmailDraft:
    """Validate an email draft object (subject + body, both non-empty strings).

    Raises:
        SchemaError: on a non-object payload or missing/blank fields.
    """
    if not isinstance(payload, dict):
        raise SchemaError(f"Expected a JSON object for the email, got {type(payload).__name__}")
    try:
        return EmailDraft.model_validate(payload)
    except ValidationError as e:
        raise SchemaError(f"Invalid email draft: {_describe(e)}") from e
