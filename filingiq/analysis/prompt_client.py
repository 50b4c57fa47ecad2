"""Sends extracted document content to the analysis model."""

from pathlib import Path

from filingiq.analysis.client_base import BaseAnalysisClient
from filingiq.analysis.prompt_loader import load_prompt_template
from filingiq.documents.models import ExtractedContent, ImageContent
from filingiq.logging.logger import Log

MAX_TEMPERATURE = 0.2


class AnalysisPromptClient:
    """Builds the analysis prompt and returns the model's raw reply."""

    def __init__(
        self,
        *,
        client: BaseAnalysisClient | None,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(MAX_TEMPERATURE, temperature))
        self._max_tokens = max_tokens
        self._instructions = load_prompt_template(prompt_template_path)

    async def analyze(
        self,
        content: ExtractedContent,
        filename: str,
        filing_status: str | None = None,
    ) -> str | None:
        """Return the raw model reply, or None when no AI client is configured.

        Raises:
            AnalysisError: if the provider call fails or returns nothing.
        """
        if self._client is None:
            Log.warning(f"AI client not configured, skipping analysis of {filename}")
            return None

        if isinstance(content, ImageContent):
            prompt = self._build_image_prompt(filing_status)
            image_data_uri: str | None = content.data_uri
        else:
            prompt = self._build_text_prompt(content.value, filing_status)
            image_data_uri = None
        Log.debug(f"Analysis prompt for {filename}:\n{prompt}")

        raw = await self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            prompt=prompt,
            image_data_uri=image_data_uri,
        )
        Log.debug(f"AI raw response for {filename}:\n{raw}")
        return raw

    def _build_image_prompt(self, filing_status: str | None) -> str:
        return self._instructions + _filing_context(filing_status)

    def _build_text_prompt(self, text: str, filing_status: str | None) -> str:
        return (
            f"{self._instructions}\n\n"
            "The following text was extracted from the document:\n\n"
            f"{text}"
            f"{_filing_context(filing_status)}"
        )


def _filing_context(filing_status: str | None) -> str:
    status = (filing_status or "").strip()
    if not status:
        return ""
    return (
        f"\n\nFiling context: the taxpayer files as {status}. "
        "Tailor the strategy notes to this filing status."
    )
