"""Converts records to and from their camelCase JSON payloads."""

import re
from dataclasses import asdict
from typing import Any

from billguard.analysis.builder import build_document_analysis, coerce_number
from billguard.analysis.models import DocumentAnalysis, StoredDocument

_SNAKE_SEGMENT_RE = re.compile(r"_([a-z])")


def analysis_to_payload(analysis: DocumentAnalysis) -> dict[str, Any]:
    """Return the camelCase JSON-ready dict of a DocumentAnalysis."""
    payload = _camelize(asdict(analysis))
    if payload["medicalBillData"] is None:
        del payload["medicalBillData"]
    return payload


def document_to_payload(document: StoredDocument) -> dict[str, Any]:
    """Flatten a StoredDocument into the persisted payload shape."""
    return {
        "id": document.id,
        "fileName": document.file_name,
        "fileType": document.file_type,
        "fileSize": document.file_size,
        "uploadedAt": document.uploaded_at,
        "analyzedAt": document.analyzed_at,
        **analysis_to_payload(document.analysis),
    }


def document_from_payload(payload: dict[str, Any]) -> StoredDocument:
    """Rebuild a StoredDocument from a persisted payload.

    The analysis part goes through the same field builder as fresh model
    output, so older payloads pick up current defaults.
    """
    return StoredDocument(
        id=str(payload.get("id", "")),
        file_name=str(payload.get("fileName", "")),
        file_type=str(payload.get("fileType", "")),
        file_size=int(coerce_number(payload.get("fileSize"))),
        uploaded_at=str(payload.get("uploadedAt", "")),
        analyzed_at=str(payload.get("analyzedAt", "")),
        analysis=build_document_analysis(payload),
    )


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camel_key(key): _camelize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_camelize(item) for item in value]
    return value


def _camel_key(key: str) -> str:
    return _SNAKE_SEGMENT_RE.sub(lambda match: match.group(1).upper(), key)
