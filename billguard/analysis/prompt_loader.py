from pathlib import Path

from billguard.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_PATH = Path(__file__).parent / "prompts" / "analysis_prompt.txt"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the analysis prompt from a file.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled analysis_prompt.txt.

    Returns:
        The prompt text, sent verbatim to the model.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_PATH
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load prompt template: {exc}") from exc
