from typing import ClassVar

from filingiq.analysis.client_base import BaseAnalysisClient
from filingiq.analysis.example_client_adapter import ExampleClientAdapter
from filingiq.analysis.openai_client_adapter import OpenAIClientAdapter
from filingiq.config.settings import Settings


class AnalysisClientFactory:
    """Creates the configured analysis client, or None when no credential is set."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    _instances: ClassVar[dict[tuple[str, str, str | None, int], BaseAnalysisClient]] = {}

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisClient | None:
        """Create a client from settings.

        Returns None when the provider needs an API key and none is set, which
        callers treat as "analysis not configured" rather than an error.
        """
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.openai_api_key.strip()
        if not api_key:
            return None
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def get(cls, settings: Settings) -> BaseAnalysisClient | None:
        """Return the process-wide client for the current credential, created lazily."""
        provider = settings.analysis_provider.lower()
        api_key = settings.openai_api_key.strip()
        if provider != "example" and not api_key:
            return None
        key = (
            provider,
            api_key,
            settings.openai_base_url.strip() or None,
            settings.openai_timeout_seconds,
        )
        client = cls._instances.get(key)
        if client is None:
            created = cls.create(settings)
            if created is None:
                return None
            client = cls._instances.setdefault(key, created)
        return client

    @classmethod
    def reset(cls) -> None:
        cls._instances.clear()

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.openai_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "openai_base_url is required for analysis_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown analysis provider '{provider}'. Choose from: {supported}")
