"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalysisClientFactory.
"""

import json
from typing import ClassVar

from filingiq.analysis.client_base import BaseAnalysisClient


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns a fixed fenced-JSON analysis.

    No network calls. Useful for local development and demos without an
    API key, and as a template for real provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "documentType": "Unknown",
        "confidence": "medium",
        "extractedData": {},
        "summary": "Example analysis: no AI provider was called for this document.",
        "notes": [],
    }

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        image_data_uri: str | None = None,
    ) -> str:
        _ = model, temperature, max_tokens, prompt, image_data_uri
        return "```json\n" + json.dumps(self.DEFAULT_RESPONSE) + "\n```"
