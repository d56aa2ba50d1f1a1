from dataclasses import dataclass, field

DOCUMENT_CATEGORIES: tuple[str, ...] = (
    "medical_bill",
    "legal_contract",
    "legal_notice",
    "insurance_eob",
    "tax_document",
    "financial_statement",
    "invoice",
    "receipt",
    "government_form",
    "real_estate",
    "employment",
    "correspondence",
    "other",
)

# Categories that may carry line-item billing data.
MEDICAL_BILL_CATEGORIES = frozenset({"medical_bill", "insurance_eob"})


@dataclass(frozen=True)
class ExtractedEntity:
    """A labelled value read from the document."""

    label: str = ""
    value: str = ""
    confidence: str = "medium"


@dataclass(frozen=True)
class MetaTag:
    key: str = ""
    value: str = ""
    category: str = "general"


@dataclass(frozen=True)
class KeyDate:
    label: str = ""
    date: str = ""


@dataclass(frozen=True)
class Amount:
    label: str = ""
    amount: float = 0.0
    currency: str = "USD"


@dataclass(frozen=True)
class Party:
    role: str = ""
    name: str = ""
    details: str = ""


@dataclass(frozen=True)
class RiskFlag:
    """A problem the model spotted, with the rule it may violate."""

    issue: str = ""
    severity: str = "info"
    explanation: str = ""
    regulation: str | None = None


@dataclass(frozen=True)
class ActionItem:
    action: str = ""
    deadline: str | None = None
    priority: str = "medium"
    status: str = "pending"


@dataclass(frozen=True)
class LineItem:
    """One billed charge and the model's verdict on it."""

    code: str = "N/A"
    description: str = ""
    billed_amount: float = 0.0
    status: str = "ok"
    issue: str | None = None
    fair_price: float = 0.0
    savings: float = 0.0
    severity: str = "low"
    regulation: str = ""

    @property
    def is_flagged(self) -> bool:
        return self.status != "ok"


@dataclass(frozen=True)
class MedicalBillData:
    """Line-item audit of a medical bill."""

    line_items: tuple[LineItem, ...] = ()
    total_billed: float = 0.0
    total_fair_price: float = 0.0
    total_savings: float = 0.0

    @property
    def flagged_items(self) -> tuple[LineItem, ...]:
        return tuple(item for item in self.line_items if item.is_flagged)


@dataclass(frozen=True)
class DocumentAnalysis:
    """Canonical, fully-defaulted record of one analyzed document."""

    category: str = "other"
    subcategory: str = ""
    title: str = ""
    summary: str = ""
    detailed_analysis: str = ""
    entities: tuple[ExtractedEntity, ...] = ()
    meta_tags: tuple[MetaTag, ...] = ()
    dates: tuple[KeyDate, ...] = ()
    amounts: tuple[Amount, ...] = ()
    parties: tuple[Party, ...] = ()
    key_findings: tuple[str, ...] = ()
    risk_flags: tuple[RiskFlag, ...] = ()
    action_items: tuple[ActionItem, ...] = ()
    legal_references: tuple[str, ...] = ()
    medical_bill_data: MedicalBillData | None = None
    confidence: str = "medium"


@dataclass(frozen=True)
class AnalysisRequest:
    """Input of a single analysis call: an uploaded image or a PDF's text."""

    content: bytes
    mime_type: str
    extracted_text: str = ""

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class StoredDocument:
    """A DocumentAnalysis enriched with upload identity and timestamps."""

    id: str
    file_name: str
    file_type: str
    file_size: int
    uploaded_at: str
    analyzed_at: str
    analysis: DocumentAnalysis = field(default_factory=DocumentAnalysis)
