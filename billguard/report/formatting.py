"""Display helpers shared by the PDF report, the letter and the CLI."""

import re
from datetime import datetime, timezone

from billguard.analysis.models import StoredDocument

CATEGORY_LABELS: dict[str, str] = {
    "medical_bill": "Medical Bill",
    "legal_contract": "Legal Contract",
    "legal_notice": "Legal Notice",
    "insurance_eob": "Insurance EOB",
    "tax_document": "Tax Document",
    "financial_statement": "Financial",
    "invoice": "Invoice",
    "receipt": "Receipt",
    "government_form": "Government",
    "real_estate": "Real Estate",
    "employment": "Employment",
    "correspondence": "Correspondence",
    "other": "Document",
}

_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9]")


def format_money(amount: float) -> str:
    """Format an amount as US dollars, e.g. ``$1,234.50``."""
    return f"${amount:,.2f}"


def category_label(category: str) -> str:
    """Human label of a category; unknown categories read as ``Document``."""
    return CATEGORY_LABELS.get(category, CATEGORY_LABELS["other"])


def report_filename(title: str) -> str:
    return f"BillGuard-{_UNSAFE_FILENAME_RE.sub('-', title)[:40]}.pdf"


def time_ago(timestamp: str, now: datetime | None = None) -> str:
    """Relative age of an ISO timestamp, e.g. ``5m ago`` or ``3d ago``."""
    try:
        then = datetime.fromisoformat(timestamp)
    except ValueError:
        return ""
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    current = now if now is not None else datetime.now(timezone.utc)
    seconds = int((current - then).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    if seconds < 86400 * 30:
        return f"{seconds // 86400}d ago"
    return then.strftime("%b %d, %Y")


def summary_text(document: StoredDocument) -> str:
    """Plain-text digest: title, summary, numbered findings and detailed analysis."""
    analysis = document.analysis
    findings = "\n".join(
        f"{index}. {finding}" for index, finding in enumerate(analysis.key_findings, start=1)
    )
    return (
        f"{analysis.title}\n\n{analysis.summary}\n\n"
        f"Key Findings:\n{findings}\n\n"
        f"Detailed Analysis:\n{analysis.detailed_analysis}"
    )
