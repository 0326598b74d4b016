"""Google Gemini generateContent client."""

from dataclasses import dataclass

import httpx

from macro_tracker.domain.errors import ProviderError
from macro_tracker.services.nutrition import TextGenerationClient


@dataclass
class HttpxGeminiClient(TextGenerationClient):
    """HTTPX-backed Gemini client."""

    api_key: str
    model: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, model: str, base_url: str) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def generate(
        self, *, prompt: str, temperature: float, max_output_tokens: int
    ) -> str:
        """Send a single-turn prompt and return the first candidate's text."""
        url = f"{self.base_url}/models/{self.model}:generateContent"
        response = await self.http_client.post(
            url,
            headers={"x-goog-api-key": self.api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": temperature,
                    "topK": 32,
                    "topP": 1,
                    "maxOutputTokens": max_output_tokens,
                },
            },
        )
        response.raise_for_status()
        payload = response.json()
        try:
            return payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError("Gemini returned no candidates") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
