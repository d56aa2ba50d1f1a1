import io

import pdfplumber

from billguard.pdf.base import BasePdfExtractor
from billguard.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = pdf.pages[: self._page_limit(len(pdf.pages))]
                texts = [page.extract_text() or "" for page in pages]
            return "\n".join(texts).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
