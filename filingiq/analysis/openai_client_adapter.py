import httpx
import openai

from filingiq.analysis.client_base import BaseAnalysisClient
from filingiq.analysis.exceptions import (
    AnalysisAuthenticationError,
    AnalysisError,
    AnalysisNetworkError,
    AnalysisRateLimitError,
)


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis AI client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        # Failed calls are terminal for the document, so the SDK must not retry.
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        image_data_uri: str | None = None,
    ) -> str:
        content: str | list[dict[str, object]] = prompt
        if image_data_uri is not None:
            content = [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_data_uri}},
            ]
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": content}],  # type: ignore[misc, list-item]
            )
        except openai.RateLimitError as exc:
            raise AnalysisRateLimitError(f"AI provider rate limit exceeded: {exc}") from exc
        except openai.AuthenticationError as exc:
            raise AnalysisAuthenticationError(
                f"AI provider rejected credentials: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AnalysisNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise AnalysisNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise AnalysisError("AI returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise AnalysisError("AI returned empty response")
        return text
