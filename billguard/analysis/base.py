from abc import ABC, abstractmethod

from billguard.analysis.models import AnalysisRequest, DocumentAnalysis


class BaseAnalyzer(ABC):
    """Contract for all document analyzers."""

    @abstractmethod
    def analyze(self, request: AnalysisRequest) -> DocumentAnalysis:
        """Interpret an uploaded document.

        Args:
            request: Uploaded image bytes, or a PDF with its extracted text.

        Returns:
            Canonical DocumentAnalysis built from the model's answer.

        Raises:
            AnalysisError: on any failure.
        """
