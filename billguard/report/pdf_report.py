"""Paginated PDF export of a stored document, drawn with reportlab."""

import io
from datetime import date

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from billguard.analysis.models import MedicalBillData, StoredDocument
from billguard.report.formatting import format_money

Color = tuple[int, int, int]

MARGIN = 20 * mm
HEADER_HEIGHT = 35 * mm

TEXT: Color = (30, 30, 30)
MUTED: Color = (120, 120, 120)
SUBTLE: Color = (100, 100, 100)
BODY: Color = (80, 80, 80)
ACCENT: Color = (245, 158, 11)
DANGER: Color = (239, 68, 68)
SUCCESS: Color = (16, 185, 129)
INFO: Color = (59, 130, 246)
RULE: Color = (200, 200, 200)
HEADER_FILL: Color = (15, 23, 42)

_FONTS = {
    "normal": "Helvetica",
    "bold": "Helvetica-Bold",
    "italic": "Helvetica-Oblique",
}

DISCLAIMER = (
    "This report was generated by BillGuard. Analysis is AI-powered and does not "
    "constitute legal, medical, or financial advice."
)


class _ReportCanvas:
    """Top-down text cursor over a reportlab canvas with automatic page breaks."""

    def __init__(self, buffer: io.BytesIO) -> None:
        self._canvas = canvas.Canvas(buffer, pagesize=A4)
        self._width, self._height = A4
        self._content_width = self._width - 2 * MARGIN
        self._y = self._height - MARGIN

    def header(self, generated_on: date) -> None:
        c = self._canvas
        c.setFillColorRGB(*_rgb(HEADER_FILL))
        c.rect(0, self._height - HEADER_HEIGHT, self._width, HEADER_HEIGHT, stroke=0, fill=1)
        c.setFillColorRGB(*_rgb(ACCENT))
        c.setFont(_FONTS["bold"], 18)
        c.drawString(MARGIN, self._height - 14 * mm, "BillGuard")
        c.setFillColorRGB(*_rgb(RULE))
        c.setFont(_FONTS["normal"], 9)
        c.drawString(MARGIN, self._height - 20 * mm, "Document Intelligence Report")
        c.drawString(
            MARGIN,
            self._height - 26 * mm,
            f"Generated: {generated_on.strftime('%B')} {generated_on.day}, {generated_on.year}",
        )
        self._y = self._height - HEADER_HEIGHT - 10 * mm

    def text(self, text: str, size: float, style: str = "normal", color: Color = TEXT) -> None:
        font = _FONTS[style]
        for line in simpleSplit(text, font, size, self._content_width):
            if self._y < MARGIN:
                self._new_page()
            self._canvas.setFont(font, size)
            self._canvas.setFillColorRGB(*_rgb(color))
            self._canvas.drawString(MARGIN, self._y, line)
            self._y -= size * 1.3

    def heading(self, title: str, color: Color = ACCENT) -> None:
        self.text(title, 10, "bold", color)
        self.spacer(2)

    def spacer(self, height_mm: float = 4) -> None:
        self._y -= height_mm * mm

    def rule(self) -> None:
        if self._y < MARGIN:
            self._new_page()
        self._canvas.setStrokeColorRGB(*_rgb(RULE))
        self._canvas.line(MARGIN, self._y, self._width - MARGIN, self._y)
        self._y -= 4 * mm

    def save(self) -> None:
        self._canvas.save()

    def _new_page(self) -> None:
        self._canvas.showPage()
        self._y = self._height - MARGIN


class PdfReportBuilder:
    """Renders a StoredDocument as a multi-section PDF report."""

    def build(self, document: StoredDocument, generated_on: date | None = None) -> bytes:
        buffer = io.BytesIO()
        pdf = _ReportCanvas(buffer)
        pdf.header(generated_on or date.today())

        analysis = document.analysis
        pdf.text(analysis.title or document.file_name, 16, "bold")
        pdf.spacer(2)
        pdf.text(
            f"{analysis.subcategory} · {analysis.category.replace('_', ' ').upper()} · "
            f"Confidence: {analysis.confidence}",
            9,
            color=MUTED,
        )
        pdf.spacer(6)

        pdf.heading("SUMMARY")
        pdf.text(analysis.summary, 10)
        pdf.spacer()
        pdf.rule()

        if analysis.key_findings:
            pdf.heading("KEY FINDINGS")
            for index, finding in enumerate(analysis.key_findings, start=1):
                pdf.text(f"{index}. {finding}", 9)
                pdf.spacer(1)
            pdf.spacer()
            pdf.rule()

        if analysis.risk_flags:
            pdf.heading("RISK FLAGS", DANGER)
            for flag in analysis.risk_flags:
                pdf.text(f"[{flag.severity.upper()}] {flag.issue}", 9, "bold", _severity_color(flag.severity))
                pdf.text(flag.explanation, 9, color=BODY)
                if flag.regulation:
                    pdf.text(f"Regulation: {flag.regulation}", 8, "italic", SUBTLE)
                pdf.spacer(3)
            pdf.rule()

        pdf.heading("DETAILED ANALYSIS")
        pdf.text(analysis.detailed_analysis, 9, color=(60, 60, 60))
        pdf.spacer()
        pdf.rule()

        if analysis.amounts:
            pdf.heading("FINANCIAL DETAILS")
            for amount in analysis.amounts:
                pdf.text(f"{amount.label}: {format_money(amount.amount)}", 9)
            pdf.spacer()
            pdf.rule()

        if analysis.dates:
            pdf.heading("KEY DATES")
            for key_date in analysis.dates:
                pdf.text(f"{key_date.label}: {key_date.date}", 9)
            pdf.spacer()
            pdf.rule()

        if analysis.parties:
            pdf.heading("PARTIES INVOLVED")
            for party in analysis.parties:
                pdf.text(f"{party.role}: {party.name}", 9, "bold")
                if party.details:
                    pdf.text(party.details, 8, color=SUBTLE)
                pdf.spacer(2)
            pdf.spacer(2)
            pdf.rule()

        if analysis.action_items:
            pdf.heading("ACTION ITEMS")
            for index, item in enumerate(analysis.action_items, start=1):
                pdf.text(
                    f"{index}. [{item.priority.upper()}] {item.action}",
                    9,
                    color=_priority_color(item.priority),
                )
                if item.deadline:
                    pdf.text(f"   Deadline: {item.deadline}", 8, "italic", SUBTLE)
                pdf.spacer(1)
            pdf.spacer()
            pdf.rule()

        if analysis.legal_references:
            pdf.heading("LEGAL REFERENCES")
            for reference in analysis.legal_references:
                pdf.text(f"• {reference}", 8, color=BODY)
            pdf.spacer()
            pdf.rule()

        if analysis.medical_bill_data is not None:
            self._medical_audit(pdf, analysis.medical_bill_data)

        if analysis.meta_tags:
            pdf.heading("METADATA TAGS")
            for tag in analysis.meta_tags:
                pdf.text(f"{tag.key}: {tag.value} [{tag.category}]", 8, color=BODY)

        pdf.spacer(8)
        pdf.text(DISCLAIMER, 7, "italic", (150, 150, 150))
        pdf.save()
        return buffer.getvalue()

    @staticmethod
    def _medical_audit(pdf: _ReportCanvas, bill: MedicalBillData) -> None:
        pdf.heading("MEDICAL BILLING AUDIT", DANGER)
        pdf.text(f"Total Billed: {format_money(bill.total_billed)}", 10, "bold")
        if bill.total_savings > 0:
            pdf.text(f"Potential Overcharges: {format_money(bill.total_savings)}", 10, "bold", DANGER)
            pdf.text(f"Fair Price Estimate: {format_money(bill.total_fair_price)}", 10, "bold", SUCCESS)
        pdf.spacer(3)
        for item in bill.line_items:
            if item.status == "ok":
                color = SUCCESS
            elif item.severity == "high":
                color = DANGER
            else:
                color = ACCENT
            pdf.text(f"{item.code} - {item.description}", 9, "bold")
            pdf.text(
                f"Billed: {format_money(item.billed_amount)} | "
                f"Fair: {format_money(item.fair_price)} | Status: {item.status.upper()}",
                8,
                color=color,
            )
            if item.issue:
                pdf.text(f"Issue: {item.issue}", 8, "italic", SUBTLE)
            pdf.spacer(3)


def _rgb(color: Color) -> tuple[float, float, float]:
    return (color[0] / 255, color[1] / 255, color[2] / 255)


def _severity_color(severity: str) -> Color:
    if severity == "critical":
        return DANGER
    if severity == "warning":
        return ACCENT
    return INFO


def _priority_color(priority: str) -> Color:
    if priority == "high":
        return DANGER
    if priority == "medium":
        return ACCENT
    return SUBTLE
