class PdfExtractionError(Exception):
    """Raised when text cannot be extracted from an uploaded PDF."""
