"""Free-text search over stored documents."""

from collections.abc import Iterable

from billguard.analysis.models import StoredDocument


def searchable_text(document: StoredDocument) -> str:
    """Lower-cased text of every field a library search looks at."""
    analysis = document.analysis
    parts: list[str] = [
        analysis.title,
        analysis.summary,
        analysis.category,
        analysis.subcategory,
        document.file_name,
        analysis.detailed_analysis,
        *analysis.key_findings,
        *(f"{entity.label} {entity.value}" for entity in analysis.entities),
        *(f"{tag.key} {tag.value}" for tag in analysis.meta_tags),
        *(f"{party.role} {party.name} {party.details}" for party in analysis.parties),
        *(flag.issue for flag in analysis.risk_flags),
        *(item.action for item in analysis.action_items),
        *analysis.legal_references,
    ]
    return " ".join(parts).lower()


def matches_query(document: StoredDocument, query: str) -> bool:
    """True if every whitespace-separated word of ``query`` occurs in the document."""
    words = query.lower().split()
    text = searchable_text(document)
    return all(word in text for word in words)


def filter_documents(documents: Iterable[StoredDocument], query: str) -> list[StoredDocument]:
    """Keep documents matching ``query``, preserving order; a blank query keeps all."""
    if not query.strip():
        return list(documents)
    return [document for document in documents if matches_query(document, query)]
