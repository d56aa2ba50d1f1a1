from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific vision model clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_output_tokens: int,
        prompt: str,
        image_base64: str | None = None,
        mime_type: str | None = None,
    ) -> str:
        """Return the provider response as plain text.

        The image, when given, is sent base64-encoded alongside the prompt.
        """
