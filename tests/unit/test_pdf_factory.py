import pytest

from billguard.config.settings import Settings
from billguard.pdf.factory import PdfExtractorFactory
from billguard.pdf.pdfplumber_adapter import PdfPlumberAdapter
from billguard.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(Settings(pdf_engine="pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(Settings(pdf_engine="pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfExtractorFactory.create(Settings(pdf_engine="PdfPlumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_passes_page_limit(self, multi_page_pdf_bytes: bytes) -> None:
        adapter = PdfExtractorFactory.create(Settings(pdf_engine="pdfplumber", pdf_max_pages=1))
        result = adapter.extract(multi_page_pdf_bytes)
        assert "Page one charges" in result
        assert "Page two charges" not in result

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create(Settings(pdf_engine="unknown"))
