class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the library."""


class UnsupportedFileTypeError(ProcessorError):
    """Raised when an upload is neither an image nor a PDF."""


class FileTooLargeError(ProcessorError):
    """Raised when an upload exceeds the configured size limit."""
