"""Nutrition lookups backed by a generative language model."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from macro_tracker.domain.errors import ProviderError
from macro_tracker.domain.foods import FoodEntry
from macro_tracker.services.cache import Cache

UNITS = ("grams", "piece")

_CODE_FENCE = re.compile(r"```json\s*|```")

_logger = logging.getLogger(__name__)


class NutritionProvider(Protocol):
    """Source of food name suggestions and nutrition estimates."""

    async def suggest(self, query: str) -> list[str]:
        """Return up to five food names matching a partial query."""

    async def lookup(self, name: str, quantity: float, unit: str) -> FoodEntry:
        """Return nutrition for a portion, already scaled by quantity."""


class TextGenerationClient(Protocol):
    """Interface for single-prompt text generation."""

    async def generate(
        self, *, prompt: str, temperature: float, max_output_tokens: int
    ) -> str:
        """Return the model's text answer for the prompt."""


@dataclass
class LlmNutritionProvider(NutritionProvider):
    """Nutrition provider that prompts an LLM for JSON answers."""

    client: TextGenerationClient
    cache: Cache
    suggestion_limit: int = 5
    suggestion_ttl_seconds: int = 3600

    async def suggest(self, query: str) -> list[str]:
        """Ask the model for common foods matching the query."""
        cleaned = query.strip()
        if not cleaned:
            return []
        cache_key = f"suggest:{cleaned.lower()}:{self.suggestion_limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return list(cached)

        prompt = (
            f'Given the input "{cleaned}", suggest {self.suggestion_limit} common '
            "food items that match this input. Return only a JSON array of food "
            'names, like ["Apple", "Apricot"] for fruits starting with \'a\'. '
            "Keep suggestions concise and relevant."
        )
        text = await self._generate(prompt, temperature=0.4, max_output_tokens=100)
        payload = _parse_json(text)
        if not isinstance(payload, list):
            raise ProviderError("Suggestion response is not a JSON array")
        names = [
            item.strip() for item in payload if isinstance(item, str) and item.strip()
        ][: self.suggestion_limit]
        self.cache.set(cache_key, names, ttl_seconds=self.suggestion_ttl_seconds)
        return names

    async def lookup(self, name: str, quantity: float, unit: str) -> FoodEntry:
        """Ask the model for nutrition of a scaled portion."""
        prompt = (
            f"Provide accurate nutritional information for {name} "
            f"({_format_quantity(quantity)} {unit}). Return only a JSON object "
            "with name, calories, protein (g), carbs (g), fat (g), and weight (g). "
            "For piece units, convert to approximate weight in grams. "
            "Scale the values according to the quantity. Example format: "
            '{"name":"Apple","calories":95,"protein":0.5,"carbs":25,'
            '"fat":0.3,"weight":120}'
        )
        text = await self._generate(prompt, temperature=0.2, max_output_tokens=150)
        payload = _parse_json(text)
        if not isinstance(payload, dict):
            raise ProviderError("Nutrition response is not a JSON object")
        try:
            return FoodEntry.model_validate(payload)
        except PydanticValidationError as exc:
            raise ProviderError(f"Nutrition response for {name!r} is invalid") from exc

    async def _generate(
        self, prompt: str, *, temperature: float, max_output_tokens: int
    ) -> str:
        try:
            return await self.client.generate(
                prompt=prompt,
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            )
        except ProviderError:
            raise
        except Exception as exc:
            _logger.warning("Text generation failed: %s", exc)
            raise ProviderError("Nutrition service request failed") from exc


def _parse_json(text: str) -> object:
    """Strip markdown code fences and decode the remaining JSON."""
    cleaned = _CODE_FENCE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        raise ProviderError("Model response is not valid JSON") from exc


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return str(quantity)
