"""
Prospector - Error taxonomy.

ExtractionError / ParseError / SchemaError come out of the response pipeline
and surface to whoever asked for the generation. PreconditionError blocks an
operation before any external call. ItemFailure is what the bulk runner records
for a single failed item; it is never raised out of a batch.
"""

from typing import Optional


class ProspectorError(Exception):
    """Base class for all domain errors. Carries a display-safe message."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str = None, user_message: str = None):
        super().__init__(message or user_message or self.user_message)
        if user_message:
            self.user_message = user_message


class ExtractionError(ProspectorError):
    """No JSON-shaped substring was found in the model response."""

    user_message = "The model response did not contain the expected JSON data."

    def __init__(self, message: str = None, raw_preview: str = ""):
        super().__init__(message)
        self.raw_preview = raw_preview


class ParseError(ProspectorError):
    """A JSON-shaped substring was found but it is not valid JSON."""

    user_message = "The model response was not valid JSON. Try adjusting the search."

    def __init__(self, message: str = None, candidate: str = ""):
        super().__init__(message)
        self.candidate = candidate


class SchemaError(ProspectorError):
    """Valid JSON, but missing or invalid required fields."""

    user_message = "The model response was missing required fields."


class PreconditionError(ProspectorError):
    """Missing profile name, service, search terms or selection."""

    user_message = "The operation cannot start: required input is missing."


class BulkRunInProgressError(PreconditionError):
    """A bulk generation batch is already running."""

    user_message = "A bulk generation is already running. Wait for it to finish."


class ItemFailure(ProspectorError):
    """One failed item inside a bulk batch. Recorded and counted, never escalated."""

    user_message = "Generation failed for one prospect."

    def __init__(self, index: int, prospect_id: str, cause: Optional[BaseException] = None,
                 batch_id: str = None, details: Optional[dict] = None):
        detail = f"{type(cause).__name__}: {cause}" if cause else "unknown failure"
        super().__init__(f"Item {index} ({prospect_id}) failed: {detail}")
        self.index = index
        self.prospect_id = prospect_id
        self.cause = cause
        self.batch_id = batch_id
        # Structured log entry (phase, context, traceback) recorded for this item
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "prospect_id": self.prospect_id,
            "error_type": type(self.cause).__name__ if self.cause else "UnknownError",
            "error": str(self.cause) if self.cause else "",
        }
