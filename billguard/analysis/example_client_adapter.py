"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from billguard.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns a fixed emergency-room bill analysis.

    No network calls. Useful for demos, local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "category": "medical_bill",
        "subcategory": "Emergency Room Visit",
        "title": "Mercy General Hospital ER Bill",
        "summary": (
            "This emergency room bill contains 3 flagged charges totalling $4,210 "
            "in potential overcharges. The largest issue is a Level 5 ER visit "
            "billed for a presentation consistent with Level 3."
        ),
        "detailedAnalysis": (
            "The ER visit code 99285 requires high-severity conditions. The CBC "
            "is billed at roughly 9x the Medicare rate, and code 99051 duplicates "
            "the facility fee already included in the ER visit."
        ),
        "entities": [
            {"label": "Patient", "value": "PATIENT_1", "confidence": "high"},
        ],
        "metaTags": [
            {"key": "bill_type", "value": "emergency", "category": "medical"},
        ],
        "dates": [{"label": "Date of Service", "date": "January 12, 2026"}],
        "amounts": [{"label": "Total Billed", "amount": 5865.0, "currency": "USD"}],
        "parties": [
            {
                "role": "Provider",
                "name": "Mercy General Hospital",
                "details": "Emergency Department",
            },
        ],
        "keyFindings": [
            "Level 5 ER visit likely upcoded from Level 3",
            "Lab charges far above Medicare rates",
            "Duplicate charge for services included in the facility fee",
        ],
        "riskFlags": [
            {
                "issue": "Upcoding of ER visit level",
                "severity": "critical",
                "explanation": "Level 5 requires an immediate threat to life.",
                "regulation": "CMS Correct Coding Initiative (NCCI)",
            },
        ],
        "actionItems": [
            {
                "action": "Request an itemized bill with CPT codes",
                "deadline": None,
                "priority": "high",
            },
        ],
        "legalReferences": [
            "Hospital Price Transparency Rule (45 CFR Part 180)",
            "CMS Correct Coding Initiative (NCCI)",
        ],
        "medicalBillData": {
            "lineItems": [
                {
                    "code": "99285",
                    "description": "ER Visit - Level 5 (Highest Complexity)",
                    "billedAmount": 4850.0,
                    "status": "overcharge",
                    "issue": "Level 5 ER code billed for a Level 3 presentation.",
                    "fairPrice": 1200.0,
                    "savings": 3650.0,
                    "severity": "high",
                    "regulation": "CMS Correct Coding Initiative (NCCI)",
                },
                {
                    "code": "85025",
                    "description": "Complete Blood Count (CBC)",
                    "billedAmount": 350.0,
                    "status": "overcharge",
                    "issue": "CBC billed at 9x the Medicare rate.",
                    "fairPrice": 40.0,
                    "savings": 310.0,
                    "severity": "high",
                    "regulation": "Hospital Price Transparency Rule (45 CFR Part 180)",
                },
                {
                    "code": "99051",
                    "description": "Service Provided in Office During Regular Hours",
                    "billedAmount": 250.0,
                    "status": "duplicate",
                    "issue": "Already included in the ER facility fee.",
                    "fairPrice": 0.0,
                    "savings": 250.0,
                    "severity": "high",
                    "regulation": "CMS Correct Coding Initiative (NCCI) - Bundling rules",
                },
                {
                    "code": "80053",
                    "description": "Comprehensive Metabolic Panel",
                    "billedAmount": 415.0,
                    "status": "ok",
                    "issue": None,
                    "fairPrice": 415.0,
                    "savings": 0.0,
                    "severity": "low",
                    "regulation": "",
                },
            ],
            "totalBilled": 5865.0,
            "totalFairPrice": 1655.0,
            "totalSavings": 4210.0,
        },
        "confidence": "high",
    }

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_output_tokens: int,
        prompt: str,
        image_base64: str | None = None,
        mime_type: str | None = None,
    ) -> str:
        _ = model, temperature, top_p, max_output_tokens, prompt, image_base64, mime_type
        return json.dumps(self.DEFAULT_RESPONSE)
