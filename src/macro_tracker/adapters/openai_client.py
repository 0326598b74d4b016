"""OpenAI Responses API client for text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from macro_tracker.domain.errors import ProviderError
from macro_tracker.services.nutrition import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation client backed by OpenAI Responses API.

    The SDK client is built on first use, so a missing API key fails the
    request instead of application startup.
    """

    model: str
    api_key: str | None = None
    client: AsyncOpenAI | None = None

    @classmethod
    def create(cls, api_key: str | None, model: str) -> "OpenAITextClient":
        """Create an OpenAI text client."""
        return cls(model=model, api_key=api_key or None)

    def _client(self) -> AsyncOpenAI:
        if self.client is None:
            try:
                self.client = AsyncOpenAI(api_key=self.api_key)
            except OpenAIError as exc:
                raise ProviderError("OpenAI client is not configured") from exc
        return self.client

    async def generate(
        self, *, prompt: str, temperature: float, max_output_tokens: int
    ) -> str:
        """Call OpenAI Responses API with a plain text prompt."""
        response = await self._client().responses.create(
            model=self.model,
            input=prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        output_text = response.output_text
        if not output_text:
            raise ProviderError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session, if one was opened."""
        if self.client is not None:
            await self.client.close()
