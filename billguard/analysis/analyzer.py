"""AI-powered document analyzer."""

import base64
from pathlib import Path

from billguard.analysis.base import BaseAnalyzer
from billguard.analysis.client_base import BaseAnalysisClient
from billguard.analysis.models import AnalysisRequest, DocumentAnalysis
from billguard.analysis.normalizer import normalize
from billguard.analysis.prompt_loader import load_prompt_template
from billguard.logging.logger import Log


class DocumentAnalyzer(BaseAnalyzer):
    """Sends an uploaded document to a vision model and normalizes the answer."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.1,
        top_p: float = 0.8,
        max_output_tokens: int = 4096,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._top_p = top_p
        self._max_output_tokens = max_output_tokens
        self._prompt_template = load_prompt_template(prompt_template_path)

    def analyze(self, request: AnalysisRequest) -> DocumentAnalysis:
        """Run one model call for the request and return the normalized record."""
        prompt = self._build_prompt(request)
        Log.debug(f"Analysis prompt:\n{prompt}")

        raw_response = self._call_ai(request, prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        analysis = normalize(raw_response)
        Log.info(
            f"Analysis complete: category={analysis.category}, "
            f"{len(analysis.risk_flags)} risk flags"
        )
        return analysis

    def _build_prompt(self, request: AnalysisRequest) -> str:
        if request.is_image or not request.extracted_text:
            return self._prompt_template
        return (
            f"{self._prompt_template}\n\n"
            f"DOCUMENT TEXT (extracted from PDF):\n{request.extracted_text}"
        )

    def _call_ai(self, request: AnalysisRequest, prompt: str) -> str:
        image_base64 = None
        if request.is_image:
            image_base64 = base64.b64encode(request.content).decode("ascii")
        return self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            top_p=self._top_p,
            max_output_tokens=self._max_output_tokens,
            prompt=prompt,
            image_base64=image_base64,
            mime_type=request.mime_type if request.is_image else None,
        )
