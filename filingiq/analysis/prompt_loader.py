from pathlib import Path

from filingiq.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the document analysis instructions from a file.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled analysis_prompt.txt.

    Returns:
        The instruction text, stripped of surrounding whitespace.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_prompt.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load prompt template: {exc}") from exc
