import io
from typing import Any

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from billguard.analysis.builder import build_document_analysis
from billguard.analysis.models import StoredDocument


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Mercy General Hospital Statement")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one charges")
    c.showPage()
    c.drawString(72, 720, "Page two charges")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def medical_bill_payload() -> dict[str, Any]:
    """A complete model answer for a small ER bill."""
    return {
        "category": "medical_bill",
        "subcategory": "Emergency Room Visit",
        "title": "Mercy General ER Bill",
        "summary": "Two charges look inflated.",
        "detailedAnalysis": "The CBC is billed far above the Medicare rate.",
        "entities": [{"label": "Patient", "value": "Jane Roe", "confidence": "high"}],
        "metaTags": [{"key": "bill_type", "value": "emergency", "category": "medical"}],
        "dates": [{"label": "Date of Service", "date": "January 12, 2026"}],
        "amounts": [{"label": "Total Billed", "amount": 5200, "currency": "USD"}],
        "parties": [
            {"role": "Healthcare Provider", "name": "Mercy General Hospital", "details": "ER"},
            {"role": "Patient", "name": "Jane Roe", "details": ""},
        ],
        "keyFindings": ["ER level looks upcoded", "CBC is marked up 9x"],
        "riskFlags": [
            {
                "issue": "Upcoding",
                "severity": "critical",
                "explanation": "Level 5 needs a threat to life.",
                "regulation": "CMS NCCI",
            },
        ],
        "actionItems": [
            {"action": "Request an itemized bill", "deadline": "2026-02-12", "priority": "high"},
        ],
        "legalReferences": ["No Surprises Act"],
        "medicalBillData": {
            "lineItems": [
                {
                    "code": "99285",
                    "description": "ER Visit - Level 5",
                    "billedAmount": 4850,
                    "status": "overcharge",
                    "issue": "Level 3 presentation billed as Level 5.",
                    "fairPrice": 1200,
                    "savings": 3650,
                    "severity": "high",
                    "regulation": "CMS NCCI",
                },
                {
                    "code": "80053",
                    "description": "Comprehensive Metabolic Panel",
                    "billedAmount": 350,
                    "status": "ok",
                    "issue": None,
                    "fairPrice": 350,
                    "savings": 0,
                    "severity": "low",
                    "regulation": "",
                },
            ],
            "totalBilled": 5200,
            "totalFairPrice": 1550,
            "totalSavings": 3650,
        },
        "confidence": "high",
    }


@pytest.fixture()
def stored_medical_bill(medical_bill_payload: dict[str, Any]) -> StoredDocument:
    return StoredDocument(
        id="doc_1736700000000_abc123",
        file_name="er-bill.jpg",
        file_type="image/jpeg",
        file_size=2048,
        uploaded_at="2026-01-13T10:00:00+00:00",
        analyzed_at="2026-01-13T10:00:05+00:00",
        analysis=build_document_analysis(medical_bill_payload),
    )
