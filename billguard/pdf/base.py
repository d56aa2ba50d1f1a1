from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    def __init__(self, max_pages: int | None = None) -> None:
        self._max_pages = max_pages

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from an uploaded PDF.

        Only the first ``max_pages`` pages are read when a limit is set,
        which keeps the prompt sent to the model bounded.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Extracted text, pages joined by newlines, stripped.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """

    def _page_limit(self, page_count: int) -> int:
        if self._max_pages is None:
            return page_count
        return min(page_count, self._max_pages)
