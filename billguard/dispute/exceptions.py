class DisputeLetterError(Exception):
    """Raised when a dispute letter cannot be produced for a document."""
