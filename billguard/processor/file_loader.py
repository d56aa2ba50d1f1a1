import mimetypes
from pathlib import Path

from billguard.processor.exceptions import FileTooLargeError, UnsupportedFileTypeError
from billguard.processor.models import UploadedFile


def guess_mime_type(path: Path) -> str:
    """Guess the MIME type of an upload from its file name."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


class FileLoader:
    """Reads an uploaded document and checks that it can be analyzed."""

    DEFAULT_MAX_SIZE_BYTES = 20 * 1024 * 1024

    def __init__(self, max_size_bytes: int | None = None) -> None:
        self._max_size_bytes = (
            max_size_bytes if max_size_bytes is not None else self.DEFAULT_MAX_SIZE_BYTES
        )

    def load(self, path: Path) -> UploadedFile:
        """Read an image or PDF upload from disk.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedFileTypeError: if the file is not an image or a PDF.
            FileTooLargeError: if the file exceeds the size limit.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type = guess_mime_type(path)
        if not mime_type.startswith("image/") and mime_type != "application/pdf":
            raise UnsupportedFileTypeError(
                f"'{path.name}' is {mime_type}; upload an image (JPG, PNG) or PDF"
            )
        size_bytes = path.stat().st_size
        if size_bytes > self._max_size_bytes:
            raise FileTooLargeError(
                f"'{path.name}' is {size_bytes} bytes (max {self._max_size_bytes})"
            )
        return UploadedFile(
            file_name=path.name,
            mime_type=mime_type,
            size_bytes=size_bytes,
            content=path.read_bytes(),
        )
