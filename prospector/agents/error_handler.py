"""
Agent Error Handler - Records non-fatal pipeline errors.

Instead of silently catching exceptions, agents call log_pipeline_error()
to record what went wrong with enough structure (phase, batch, prospect) to
trace it later. The returned entry is what callers keep for diagnostics.

Usage:
    from prospector.agents.error_handler import log_pipeline_error

    try:
        result = await risky_operation()
    except Exception as e:
        log_pipeline_error(phase="bulk_email", error=e, prospect_id=pid)
"""

import logging
import traceback
from datetime import datetime, timezone

from prospector.errors import ProspectorError

logger = logging.getLogger("prospector.error_handler")

GENERIC_USER_MESSAGE = "Something went wrong. Please try again."


def log_pipeline_error(
    phase: str,
    error: BaseException = None,
    error_message: str = None,
    batch_id: str = None,
    prospect_id: str = None,
    item_index: int = None,
    context: dict = None,
    severity: str = "warning",
) -> dict:
    """Log a non-fatal pipeline error and return a structured entry for it.

    Args:
        phase: Pipeline phase where the error occurred (search, draft, bulk_email, ...)
        error: The exception object (optional if error_message provided)
        error_message: Human-readable error description
        batch_id: Associated bulk batch ID
        prospect_id: Associated prospect ID
        item_index: 1-based position inside a batch
        context: Additional context dict
        severity: "warning", "error", or "critical"
    """
    msg = error_message or (str(error) if error else "Unknown error")
    error_type = type(error).__name__ if error else "UnknownError"

    log_extra = {
        "phase": phase,
        "batch_id": batch_id or "",
        "prospect_id": prospect_id or "",
    }
    if item_index is not None:
        log_extra["item_index"] = item_index

    if severity == "critical":
        logger.critical("Pipeline error in %s: %s", phase, msg, extra=log_extra)
    elif severity == "error":
        logger.error("Pipeline error in %s: %s", phase, msg, extra=log_extra)
    else:
        logger.warning("Pipeline error in %s: %s", phase, msg, extra=log_extra)

    entry = {
        "phase": phase,
        "error_type": error_type,
        "error_message": msg,
        "batch_id": batch_id,
        "prospect_id": prospect_id,
        "item_index": item_index,
        "context": dict(context or {}),
        "severity": severity,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    if error is not None and error.__traceback__ is not None:
        entry["context"]["traceback"] = "".join(
            traceback.format_exception(type(error), error, error.__traceback__))[-500:]
    return entry


def user_message_for(error: BaseException) -> str:
    """The display-safe message for an error surfaced to the user."""
    if isinstance(error, ProspectorError):
        return error.user_message
    return GENERIC_USER_MESSAGE
