"""Builds a DocumentAnalysis from a loosely-typed model payload.

Every field is coerced on its own: a missing or wrongly-typed value gets its
documented default, list fields are defaulted element by element, and nothing
in here raises for a well-formed JSON object. Enum-like strings that are
present are passed through unvalidated; display code maps unknown values to
a neutral fallback.
"""

import math
from collections.abc import Callable
from typing import Any, TypeVar

from billguard.analysis.models import (
    MEDICAL_BILL_CATEGORIES,
    ActionItem,
    Amount,
    DocumentAnalysis,
    ExtractedEntity,
    KeyDate,
    LineItem,
    MedicalBillData,
    MetaTag,
    Party,
    RiskFlag,
)

T = TypeVar("T")


def build_document_analysis(data: dict[str, Any]) -> DocumentAnalysis:
    """Coerce a parsed JSON object into a canonical DocumentAnalysis."""
    category = _choice(data.get("category"), "other")
    return DocumentAnalysis(
        category=category,
        subcategory=_text(data.get("subcategory")),
        title=_text(data.get("title")),
        summary=_text(data.get("summary")),
        detailed_analysis=_text(data.get("detailedAnalysis")),
        entities=_sequence(data.get("entities"), _build_entity),
        meta_tags=_sequence(data.get("metaTags"), _build_meta_tag),
        dates=_sequence(data.get("dates"), _build_date),
        amounts=_sequence(data.get("amounts"), _build_amount),
        parties=_sequence(data.get("parties"), _build_party),
        key_findings=_sequence(data.get("keyFindings"), _text),
        risk_flags=_sequence(data.get("riskFlags"), _build_risk_flag),
        action_items=_sequence(data.get("actionItems"), _build_action_item),
        legal_references=_sequence(data.get("legalReferences"), _text),
        medical_bill_data=_build_medical_bill_data(data.get("medicalBillData"), category),
        confidence=_choice(data.get("confidence"), "medium"),
    )


def coerce_number(raw: Any) -> float:
    """Best-effort numeric parse; 0.0 for anything that is not a finite number."""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return 0.0
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _text(raw: Any, default: str = "") -> str:
    return raw if isinstance(raw, str) else default


def _optional_text(raw: Any) -> str | None:
    return raw if isinstance(raw, str) and raw else None


def _choice(raw: Any, default: str) -> str:
    return raw if isinstance(raw, str) and raw else default


def _fields(raw: Any) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _sequence(raw: Any, build: Callable[[Any], T]) -> tuple[T, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(build(item) for item in raw)


def _build_entity(raw: Any) -> ExtractedEntity:
    item = _fields(raw)
    return ExtractedEntity(
        label=_text(item.get("label")),
        value=_text(item.get("value")),
        confidence=_choice(item.get("confidence"), "medium"),
    )


def _build_meta_tag(raw: Any) -> MetaTag:
    item = _fields(raw)
    return MetaTag(
        key=_text(item.get("key")),
        value=_text(item.get("value")),
        category=_choice(item.get("category"), "general"),
    )


def _build_date(raw: Any) -> KeyDate:
    item = _fields(raw)
    return KeyDate(label=_text(item.get("label")), date=_text(item.get("date")))


def _build_amount(raw: Any) -> Amount:
    item = _fields(raw)
    return Amount(
        label=_text(item.get("label")),
        amount=coerce_number(item.get("amount")),
        currency=_choice(item.get("currency"), "USD"),
    )


def _build_party(raw: Any) -> Party:
    item = _fields(raw)
    return Party(
        role=_text(item.get("role")),
        name=_text(item.get("name")),
        details=_text(item.get("details")),
    )


def _build_risk_flag(raw: Any) -> RiskFlag:
    item = _fields(raw)
    return RiskFlag(
        issue=_text(item.get("issue")),
        severity=_choice(item.get("severity"), "info"),
        explanation=_text(item.get("explanation")),
        regulation=_optional_text(item.get("regulation")),
    )


def _build_action_item(raw: Any) -> ActionItem:
    item = _fields(raw)
    return ActionItem(
        action=_text(item.get("action")),
        deadline=_optional_text(item.get("deadline")),
        priority=_choice(item.get("priority"), "medium"),
        status=_choice(item.get("status"), "pending"),
    )


def _build_line_item(raw: Any) -> LineItem:
    item = _fields(raw)
    return LineItem(
        code=_choice(item.get("code"), "N/A"),
        description=_text(item.get("description")),
        billed_amount=coerce_number(item.get("billedAmount")),
        status=_choice(item.get("status"), "ok"),
        issue=_optional_text(item.get("issue")),
        fair_price=coerce_number(item.get("fairPrice")),
        savings=coerce_number(item.get("savings")),
        severity=_choice(item.get("severity"), "low"),
        regulation=_text(item.get("regulation")),
    )


def _build_medical_bill_data(raw: Any, category: str) -> MedicalBillData | None:
    if not isinstance(raw, dict) or category not in MEDICAL_BILL_CATEGORIES:
        return None
    return MedicalBillData(
        line_items=_sequence(raw.get("lineItems"), _build_line_item),
        total_billed=coerce_number(raw.get("totalBilled")),
        total_fair_price=coerce_number(raw.get("totalFairPrice")),
        total_savings=coerce_number(raw.get("totalSavings")),
    )
