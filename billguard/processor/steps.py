import secrets
import string
import time
from datetime import datetime, timezone

from billguard.analysis.base import BaseAnalyzer
from billguard.analysis.models import AnalysisRequest, StoredDocument
from billguard.database.repositories.document_repository import DocumentRepository
from billguard.logging.logger import Log
from billguard.pdf.base import BasePdfExtractor
from billguard.pdf.exceptions import PdfExtractionError
from billguard.processor.file_loader import FileLoader
from billguard.processor.pipeline import PipelineContext, PipelineStep

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_document_id() -> str:
    """Return an id like ``doc_1736700000000_k3x9qa``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    return f"doc_{int(time.time() * 1000)}_{suffix}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class LoadFileStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        context.upload = self._file_loader.load(context.source_path)
        context.uploaded_at = utc_now_iso()
        Log.info(
            f"Loaded {context.upload.size_bytes} bytes from {context.upload.file_name} "
            f"({context.upload.mime_type})"
        )
        return context


class ExtractTextStep(PipelineStep):
    """Extracts text from PDF uploads; images pass through untouched."""

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before text extraction")
        if not context.upload.is_pdf:
            return context
        context.extracted_text = self._pdf_extractor.extract(context.upload.content)
        if not context.extracted_text:
            raise PdfExtractionError(
                f"No text found in {context.upload.file_name}; upload a photo of it instead"
            )
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from {context.upload.file_name}"
        )
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before analysis")
        request = AnalysisRequest(
            content=context.upload.content,
            mime_type=context.upload.mime_type,
            extracted_text=context.extracted_text,
        )
        context.analysis = self._analyzer.analyze(request)
        context.analyzed_at = utc_now_iso()
        Log.info(
            f"Analyzed {context.upload.file_name}: {context.analysis.category}, "
            f"confidence {context.analysis.confidence}"
        )
        return context


class BuildDocumentStep(PipelineStep):
    """Attaches identity and file metadata to the analysis."""

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None or context.analysis is None:
            raise ValueError(
                "PipelineContext.upload and analysis must be set before building the document"
            )
        context.document = StoredDocument(
            id=generate_document_id(),
            file_name=context.upload.file_name,
            file_type=context.upload.mime_type,
            file_size=context.upload.size_bytes,
            uploaded_at=context.uploaded_at,
            analyzed_at=context.analyzed_at,
            analysis=context.analysis,
        )
        return context


class PersistDocumentStep(PipelineStep):
    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before persist")
        self._doc_repo.save(context.document)
        Log.info(f"Saved document {context.document.id}")
        return context
