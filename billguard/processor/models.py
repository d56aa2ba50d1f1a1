from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """A document file read from disk, ready for analysis."""

    file_name: str
    mime_type: str
    size_bytes: int
    content: bytes

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == "application/pdf"
