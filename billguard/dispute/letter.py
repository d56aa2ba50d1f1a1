"""Plain-text dispute letters for flagged medical bill charges.

The letter is a separate value: generating one never changes the stored
document it was built from.
"""

import re
from dataclasses import dataclass
from datetime import date

from billguard.analysis.models import LineItem, StoredDocument
from billguard.dispute.exceptions import DisputeLetterError
from billguard.report.formatting import format_money

NAME_PLACEHOLDER = "[YOUR NAME]"
ACCOUNT_PLACEHOLDER = "[ACCOUNT NUMBER]"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class DisputeRequest:
    """What the letter is about and who sends it."""

    provider: str
    date_of_service: str
    bill_type: str
    line_items: tuple[LineItem, ...]
    total_billed: float
    total_fair_price: float
    total_savings: float
    patient_name: str = NAME_PLACEHOLDER
    account_number: str = ACCOUNT_PLACEHOLDER

    @property
    def flagged_items(self) -> tuple[LineItem, ...]:
        return tuple(item for item in self.line_items if item.is_flagged)


@dataclass(frozen=True)
class DisputeLetter:
    provider: str
    text: str

    @property
    def filename(self) -> str:
        return f"BillGuard-Dispute-{_WHITESPACE_RE.sub('-', self.provider.strip())}.txt"


def dispute_request_for(
    document: StoredDocument,
    patient_name: str | None = None,
    account_number: str | None = None,
) -> DisputeRequest:
    """Derive a DisputeRequest from a stored medical bill.

    Raises:
        DisputeLetterError: if the document has no medical billing data.
    """
    analysis = document.analysis
    bill = analysis.medical_bill_data
    if bill is None:
        raise DisputeLetterError(f"Document {document.id} has no medical billing data")
    provider = next(
        (party.name for party in analysis.parties if "provider" in party.role.lower() and party.name),
        analysis.title,
    )
    date_of_service = analysis.dates[0].date if analysis.dates else "Unknown"
    return DisputeRequest(
        provider=provider or "Provider",
        date_of_service=date_of_service or "Unknown",
        bill_type=analysis.subcategory,
        line_items=bill.line_items,
        total_billed=bill.total_billed,
        total_fair_price=bill.total_fair_price,
        total_savings=bill.total_savings,
        patient_name=patient_name or NAME_PLACEHOLDER,
        account_number=account_number or ACCOUNT_PLACEHOLDER,
    )


def generate_dispute_letter(request: DisputeRequest, today: date | None = None) -> DisputeLetter:
    """Write a letter disputing every line item not marked ``ok``.

    Raises:
        DisputeLetterError: if no line item is flagged.
    """
    flagged = request.flagged_items
    if not flagged:
        raise DisputeLetterError("No flagged charges to dispute")

    letter_date = today or date.today()
    disputed_total = sum(item.savings for item in flagged)
    regulations = list(dict.fromkeys(item.regulation for item in flagged if item.regulation))

    lines = [
        request.patient_name,
        f"Account Number: {request.account_number}",
        "",
        f"{letter_date.strftime('%B')} {letter_date.day}, {letter_date.year}",
        "",
        f"Billing Department, {request.provider}",
        "",
        f"RE: Formal Dispute of Charges - Account {request.account_number}",
        f"Date of Service: {request.date_of_service}",
    ]
    if request.bill_type:
        lines.append(f"Service: {request.bill_type}")
    lines += [
        "",
        "To Whom It May Concern:",
        "",
        (
            f"I am writing to formally dispute {len(flagged)} charge(s) on my bill from "
            f"{request.provider}. After reviewing the itemized charges, I believe the "
            "following items were billed in error or above a fair price:"
        ),
        "",
    ]
    for index, item in enumerate(flagged, start=1):
        lines.append(
            f"{index}. {item.code} - {item.description}: billed "
            f"{format_money(item.billed_amount)}, fair price "
            f"{format_money(item.fair_price)} ({item.status.replace('_', ' ')})"
        )
        if item.issue:
            lines.append(f"   Issue: {item.issue}")
        if item.regulation:
            lines.append(f"   Reference: {item.regulation}")
    lines += [
        "",
        f"Total billed: {format_money(request.total_billed)}",
        f"Estimated fair price: {format_money(request.total_fair_price)}",
        f"Amount in dispute: {format_money(disputed_total)}",
        "",
    ]
    if regulations:
        lines.append("These charges may conflict with:")
        lines += [f"- {regulation}" for regulation in regulations]
        lines.append("")
    lines += [
        "I request that you:",
        "1. Provide a fully itemized bill with CPT/HCPCS codes for every charge.",
        "2. Review and correct or remove the disputed charges listed above.",
        "3. Place the account on hold and suspend collection activity while this dispute is open.",
        "4. Respond in writing within 30 days of receiving this letter.",
        "",
        "Thank you for your prompt attention to this matter.",
        "",
        "Sincerely,",
        "",
        request.patient_name,
    ]
    return DisputeLetter(provider=request.provider, text="\n".join(lines) + "\n")
