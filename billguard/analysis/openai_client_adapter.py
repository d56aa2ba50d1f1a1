import httpx
import openai

from billguard.analysis.client_base import BaseAnalysisClient
from billguard.analysis.exceptions import AnalysisError, AnalysisNetworkError


class OpenAIClientAdapter(BaseAnalysisClient):
    """Vision client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        content: list[dict[str, object]] = [{"type": "text", "text": prompt}]
        if image_base64 is not None:
            data_url = f"data:{mime_type or 'image/jpeg'};base64,{image_base64}"
            content.append({"type": "image_url", "image_url": {"url": data_url}})

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                top_p=top_p,
                max_tokens=max_output_tokens,
                messages=[{"role": "user", "content": content}],  # type: ignore[list-item]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise AnalysisError("AI returned empty response")
        return text
