"""
Tests for shared agent utilities and the Gemini text generator.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from agents.base import GeminiTextGenerator
from agents.common.utils import parse_json_response, retry_with_backoff
from core.config import settings


class TestParseJsonResponse:
    """JSON extraction from model output."""

    def test_plain_object(self):
        assert parse_json_response('{"a": 1}') == {"a": 1}

    def test_fenced_object(self):
        assert parse_json_response('Here:\n```json\n{"a": [1, 2]}\n```\nDone') == {"a": [1, 2]}

    def test_unterminated_fence(self):
        assert parse_json_response('```json\n{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("response", [None, "", "   ", "nope", "[1, 2]", "3", '"text"', "{'a': 1}"])
    def test_rejected(self, response):
        assert parse_json_response(response) is None


class TestRetryWithBackoff:
    """Retry decorator."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        calls = []

        @retry_with_backoff(max_retries=2, initial_delay=0)
        async def op():
            calls.append(1)
            return "done"

        assert await op() == "done"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        calls = []

        @retry_with_backoff(max_retries=2, initial_delay=0)
        async def op():
            calls.append(1)
            if len(calls) < 2:
                raise ConnectionError("flaky")
            return "done"

        assert await op() == "done"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_raises_last_error(self):
        calls = []

        @retry_with_backoff(max_retries=1, initial_delay=0)
        async def op():
            calls.append(1)
            raise ValueError(f"attempt {len(calls)}")

        with pytest.raises(ValueError, match="attempt 2"):
            await op()
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_zero_retries_is_single_attempt(self):
        calls = []

        @retry_with_backoff(max_retries=0, initial_delay=0)
        async def op():
            calls.append(1)
            raise ValueError("once")

        with pytest.raises(ValueError):
            await op()
        assert len(calls) == 1


class TestGeminiTextGenerator:
    """Client construction and JSON-mode requests."""

    @pytest.mark.parametrize("api_key,base_url", [("", "http://x"), ("key", "")])
    def test_requires_credentials(self, api_key, base_url):
        with pytest.raises(ValueError):
            GeminiTextGenerator(api_key=api_key, base_url=base_url)

    @patch("agents.base.genai.Client")
    def test_from_settings(self, mock_client):
        generator = GeminiTextGenerator.from_settings(settings, instructions="Be kind")

        assert generator.model == settings.ai_model
        assert generator.instructions == "Be kind"
        kwargs = mock_client.call_args.kwargs
        assert kwargs["api_key"] == settings.ai_api_key
        assert kwargs["http_options"].base_url == settings.ai_base_url

    @pytest.mark.asyncio
    @patch("agents.base.genai.Client")
    async def test_generate_requests_json(self, mock_client):
        generate_content = AsyncMock(return_value=SimpleNamespace(text='{"ok": true}'))
        mock_client.return_value = MagicMock()
        mock_client.return_value.aio.models.generate_content = generate_content

        generator = GeminiTextGenerator(
            api_key="key", base_url="http://localhost:9999", instructions="Coach"
        )
        result = await generator.generate("Evaluate")

        assert result == '{"ok": true}'
        kwargs = generate_content.call_args.kwargs
        assert kwargs["contents"] == "Evaluate"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].system_instruction == "Coach"

    @pytest.mark.asyncio
    @patch("agents.base.genai.Client")
    async def test_generate_empty_text(self, mock_client):
        mock_client.return_value = MagicMock()
        mock_client.return_value.aio.models.generate_content = AsyncMock(
            return_value=SimpleNamespace(text=None)
        )

        generator = GeminiTextGenerator(api_key="key", base_url="http://localhost:9999")

        assert await generator.generate("Evaluate") == ""
