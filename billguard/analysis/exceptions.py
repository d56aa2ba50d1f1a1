class AnalysisError(Exception):
    """Raised when document analysis fails."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class NormalizationError(AnalysisError):
    """Raised when a model response cannot be turned into a DocumentAnalysis."""


class UnparseableResponseError(NormalizationError):
    """The model response is not a JSON object, even after fence-stripping.

    Only the first characters of the raw response are kept, to bound the
    size of logs and error reports.
    """

    user_message = "Could not parse the document clearly. Please try with a clearer photo."

    def __init__(self, raw_prefix: str, detail: str = "Invalid JSON response") -> None:
        super().__init__(detail)
        self.raw_prefix = raw_prefix


class UpstreamRejectedError(NormalizationError):
    """The model reported that the input is not a recognizable document."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
