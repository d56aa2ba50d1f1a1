from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from billguard.analysis.models import DocumentAnalysis, StoredDocument
from billguard.processor.models import UploadedFile


@dataclass(slots=True)
class PipelineContext:
    source_path: Path
    upload: UploadedFile | None = None
    uploaded_at: str = ""
    extracted_text: str = ""
    analysis: DocumentAnalysis | None = None
    analyzed_at: str = ""
    document: StoredDocument | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
