"""Text generation clients used by the agents."""

from abc import ABC, abstractmethod
from typing import Optional
from google import genai
from google.genai import types


class TextGenerator(ABC):
    """Capability interface: given a prompt, return text that should parse as JSON."""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate a completion for the prompt.

        Args:
            prompt: User prompt

        Returns:
            Raw model output
        """
        pass


class GeminiTextGenerator(TextGenerator):
    """JSON-mode text generation through the Google GenAI SDK.

    Built once at startup and shared by every request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str = "gemini-2.0-flash",
        instructions: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """Initialize the generator.

        Args:
            api_key: API key for the generative service
            base_url: Base endpoint URL for the generative service
            model: Model to use
            instructions: Optional system instructions
            timeout_seconds: Optional HTTP timeout enforced by the SDK
        """
        if not api_key:
            raise ValueError("api_key is required")
        if not base_url:
            raise ValueError("base_url is required")

        self.model = model
        self.instructions = instructions
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(
                base_url=base_url,
                timeout=int(timeout_seconds * 1000) if timeout_seconds else None,
            ),
        )

    @classmethod
    def from_settings(cls, settings, instructions: Optional[str] = None) -> "GeminiTextGenerator":
        """Build a generator from application settings."""
        return cls(
            api_key=settings.ai_api_key,
            base_url=settings.ai_base_url,
            model=settings.ai_model,
            instructions=instructions,
            timeout_seconds=settings.ai_timeout_seconds,
        )

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=self.instructions,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""
