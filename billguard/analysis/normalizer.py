"""Turns raw model output into a canonical DocumentAnalysis."""

import json
import re
from typing import Any

from billguard.analysis.builder import build_document_analysis
from billguard.analysis.exceptions import UnparseableResponseError, UpstreamRejectedError
from billguard.analysis.models import DocumentAnalysis
from billguard.logging.logger import Log

RAW_PREFIX_LIMIT = 500

_OPENING_FENCE_RE = re.compile(r"^```(?:json)?", re.IGNORECASE)
_CLOSING_FENCE_RE = re.compile(r"```$")
# Fenced block inside prose. Shortest match first, then first-to-last fence
# for payloads that carry backticks in their strings.
_FENCED_BLOCK_RES = (
    re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE),
    re.compile(r"```(?:json)?\s*(.*)\s*```", re.DOTALL | re.IGNORECASE),
)


def normalize(raw_text: str) -> DocumentAnalysis:
    """Parse a model response and build a fully-populated DocumentAnalysis.

    Args:
        raw_text: Text returned by the model, possibly wrapped in code fences.

    Returns:
        A DocumentAnalysis with every missing field set to its default.

    Raises:
        UnparseableResponseError: if the text is not a JSON object.
        UpstreamRejectedError: if the model answered with an ``error`` field.
    """
    data = parse_response(raw_text)
    _raise_if_rejected(data)
    return build_document_analysis(data)


def strip_code_fences(raw_text: str) -> str:
    """Remove a leading ```json (or ```) and a trailing ``` from a payload.

    Only the edges are touched, so backticks inside JSON strings survive and
    applying this twice changes nothing.
    """
    text = _OPENING_FENCE_RE.sub("", raw_text.strip())
    return _CLOSING_FENCE_RE.sub("", text).strip()


def parse_response(raw_text: str) -> dict[str, Any]:
    candidates = [strip_code_fences(raw_text)]
    for pattern in _FENCED_BLOCK_RES:
        match = pattern.search(raw_text)
        if match is not None:
            candidates.append(match.group(1).strip())

    error: Exception | None = None
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError) as exc:
            error = error or exc
            continue
        if not isinstance(parsed, dict):
            raise _unparseable(raw_text, "JSON response must be an object")
        return parsed

    raise _unparseable(raw_text, f"Invalid JSON response: {error}") from error


def _unparseable(raw_text: str, detail: str) -> UnparseableResponseError:
    prefix = raw_text[:RAW_PREFIX_LIMIT]
    Log.error(f"Failed to parse model response: {prefix}")
    return UnparseableResponseError(prefix, detail)


def _raise_if_rejected(data: dict[str, Any]) -> None:
    error = data.get("error")
    if not error:
        return
    message = error if isinstance(error, str) else json.dumps(error)
    Log.warning(f"Model rejected the document: {message}")
    raise UpstreamRejectedError(message)
