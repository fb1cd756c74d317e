"""
Prospector - Response Extractor
Pulls a single JSON value (array or object) out of free-form model output.

Models wrap their JSON in prose or code fences often enough that we never
json.loads() the raw text directly. The candidate payload is the span from the
first opening bracket to the last matching closing bracket.

Known limitation: a bracket pair in the prose *before* the real payload (for
example an inline JSON sample in an explanation) gets swallowed into the
candidate. This is a best-effort scan, not a grammar-aware recovery.
"""

import json
import logging
from typing import Any, List

from prospector.errors import ExtractionError, ParseError

logger = logging.getLogger("prospector.agents.response_extractor")

BRACKETS = {
    "array": ("[", "]"),
    "object": ("{", "}"),
}

PREVIEW_CHARS = 100


def _preview(text: str) -> str:
    text = (text or "").strip().replace("\n", " ")
    return text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")


def find_candidate(raw_text: str, kind: str) -> str:
    """Return the bracket-delimited candidate substring (inclusive).

    Raises:
        ExtractionError: if either bracket is missing, or the closing bracket
            does not come after the opening one.
    """
    if kind not in BRACKETS:
        raise ValueError(f"kind must be one of {sorted(BRACKETS)}, got '{kind}'")
    open_char, close_char = BRACKETS[kind]
    text = raw_text or ""

    start = text.find(open_char)
    end = text.rfind(close_char)
    if start == -1 or end == -1 or end <= start:
        logger.warning("No JSON %s found in model response: %s", kind, _preview(text))
        raise ExtractionError(
            f"Model response did not contain a JSON {kind}. Response was: {_preview(text)}",
            raw_preview=_preview(text),
        )
    return text[start:end + 1]


def extract_json(raw_text: str, kind: str = "array") -> Any:
    """Locate and parse the JSON payload embedded in raw_text.

    Args:
        raw_text: The model output, possibly with surrounding prose.
        kind: "array" for a list payload, "object" for a dict payload.

    Returns:
        The parsed value.

    Raises:
        ExtractionError: no bracket pair found (nothing is parsed).
        ParseError: the candidate is not valid JSON.
    """
    candidate = find_candidate(raw_text, kind)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning("Candidate JSON %s failed to parse: %s", kind, e)
        raise ParseError(f"Invalid JSON {kind} in model response: {e}",
                         candidate=candidate) from e


def extract_array(raw_text: str) -> List[Any]:
    return extract_json(raw_text, "array")


def extract_object(raw_text: str) -> dict:
    return extract_json(raw_text, "object")
