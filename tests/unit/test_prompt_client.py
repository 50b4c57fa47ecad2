from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from filingiq.analysis.client_base import BaseAnalysisClient
from filingiq.analysis.exceptions import AnalysisError, AnalysisRateLimitError
from filingiq.analysis.prompt_client import AnalysisPromptClient
from filingiq.documents.models import ImageContent, TextContent


def _make_client(reply: str = "reply") -> MagicMock:
    client = MagicMock(spec=BaseAnalysisClient)
    client.create_chat_completion = AsyncMock(return_value=reply)
    return client


def _make_prompt_client(
    client: MagicMock | None, temperature: float = 0.1
) -> AnalysisPromptClient:
    return AnalysisPromptClient(
        client=client, model="gpt-4o", temperature=temperature, max_tokens=1500
    )


class TestNotConfigured:
    @pytest.mark.asyncio
    async def test_returns_none_without_client(self) -> None:
        prompt_client = _make_prompt_client(None)
        assert await prompt_client.analyze(TextContent("x"), "w2.pdf") is None


class TestTextMode:
    @pytest.mark.asyncio
    async def test_returns_raw_reply(self) -> None:
        prompt_client = _make_prompt_client(_make_client("the reply"))
        assert await prompt_client.analyze(TextContent("Wages 100"), "w2.pdf") == "the reply"

    @pytest.mark.asyncio
    async def test_prompt_contains_instructions_and_text(self) -> None:
        client = _make_client()
        await _make_prompt_client(client).analyze(TextContent("Box 1 Wages 85000"), "w2.pdf")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert "box 12" in kwargs["prompt"].lower()
        assert kwargs["prompt"].endswith("Box 1 Wages 85000")
        assert kwargs["image_data_uri"] is None
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == 1500

    @pytest.mark.asyncio
    async def test_appends_filing_status(self) -> None:
        client = _make_client()
        await _make_prompt_client(client).analyze(
            TextContent("Wages 100"), "w2.pdf", filing_status="Married Filing Separately"
        )

        prompt = client.create_chat_completion.call_args.kwargs["prompt"]
        assert prompt.index("Wages 100") < prompt.index("Married Filing Separately")

    @pytest.mark.asyncio
    async def test_blank_filing_status_ignored(self) -> None:
        client = _make_client()
        await _make_prompt_client(client).analyze(TextContent("x"), "w2.pdf", filing_status="  ")

        assert "Filing context" not in client.create_chat_completion.call_args.kwargs["prompt"]


class TestImageMode:
    @pytest.mark.asyncio
    async def test_sends_data_uri(self) -> None:
        client = _make_client()
        await _make_prompt_client(client).analyze(ImageContent("AAAA", "png"), "w2.png")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["image_data_uri"] == "data:image/png;base64,AAAA"
        assert "AAAA" not in kwargs["prompt"]


class TestSampling:
    @pytest.mark.asyncio
    async def test_clamps_temperature(self) -> None:
        client = _make_client()
        await _make_prompt_client(client, temperature=0.9).analyze(TextContent("x"), "a.pdf")
        assert client.create_chat_completion.call_args.kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_negative_temperature_clamped_to_zero(self) -> None:
        client = _make_client()
        await _make_prompt_client(client, temperature=-1).analyze(TextContent("x"), "a.pdf")
        assert client.create_chat_completion.call_args.kwargs["temperature"] == 0.0


class TestErrors:
    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self) -> None:
        client = _make_client()
        client.create_chat_completion.side_effect = AnalysisRateLimitError("quota")
        with pytest.raises(AnalysisRateLimitError, match="quota"):
            await _make_prompt_client(client).analyze(TextContent("x"), "a.pdf")

    def test_missing_template_raises(self, tmp_path: Path) -> None:
        with pytest.raises(AnalysisError, match="Failed to load prompt template"):
            AnalysisPromptClient(
                client=None, model="m", prompt_template_path=tmp_path / "missing.txt"
            )


class TestDebugLogging:
    @pytest.mark.asyncio
    async def test_logs_prompt_and_reply_in_debug(self) -> None:
        with patch("filingiq.analysis.prompt_client.Log") as mock_log:
            await _make_prompt_client(_make_client()).analyze(TextContent("x"), "w2.pdf")
        messages = [c.args[0] for c in mock_log.debug.call_args_list]
        assert "prompt" in messages[0].lower()
        assert "raw response" in messages[1].lower()
