from pathlib import Path

from billguard.analysis.factory import AnalyzerFactory
from billguard.analysis.models import StoredDocument
from billguard.config.settings import Settings
from billguard.database.repositories.document_repository import DocumentRepository
from billguard.logging.logger import Log
from billguard.pdf.factory import PdfExtractorFactory
from billguard.processor.file_loader import FileLoader
from billguard.processor.pipeline import PipelineContext, PipelineStep
from billguard.processor.steps import (
    AnalyzeStep,
    BuildDocumentStep,
    ExtractTextStep,
    LoadFileStep,
    PersistDocumentStep,
)


class Processor:
    """Runs one uploaded document through the analysis pipeline.

    Pipeline: load -> extract PDF text -> analyze -> build document -> persist.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, path: Path) -> StoredDocument:
        """Analyze the file at ``path`` and return the resulting document."""
        Log.info(f"Processing {path}")
        context = PipelineContext(source_path=path)
        for step in self._steps:
            context = step.run(context)
        if context.document is None:
            raise ValueError("Pipeline finished without producing a document")
        return context.document


def build_processor(settings: Settings, persist: bool = True) -> Processor:
    """Build a Processor with all required adapters.

    With ``persist=False`` the document is analyzed but not saved, so no
    database connection is needed.
    """
    steps: list[PipelineStep] = [
        LoadFileStep(FileLoader(max_size_bytes=settings.max_upload_size_bytes)),
        ExtractTextStep(PdfExtractorFactory.create(settings)),
        AnalyzeStep(AnalyzerFactory.create(settings)),
        BuildDocumentStep(),
    ]
    if persist:
        steps.append(PersistDocumentStep(DocumentRepository()))
    return Processor(steps)
