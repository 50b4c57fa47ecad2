from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific document analysis AI clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        image_data_uri: str | None = None,
    ) -> str:
        """Return provider response as plain text.

        When ``image_data_uri`` is given the prompt is sent together with the
        inlined image to a vision-capable model.
        """
