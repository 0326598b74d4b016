"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from macro_tracker.config import Settings
from macro_tracker.containers import AppContainer, build_tracker
from macro_tracker.domain.foods import FoodEntry
from macro_tracker.services.nutrition import NutritionProvider, TextGenerationClient


def banana() -> FoodEntry:
    return FoodEntry(
        name="Banana", calories=105, protein=1.3, carbs=27, fat=0.4, weight=118
    )


@dataclass
class FakeNutritionProvider(NutritionProvider):
    """Fake provider that records calls and returns fixed data."""

    entry: FoodEntry = field(default_factory=banana)
    names: list[str] = field(
        default_factory=lambda: ["Apple", "Apricot", "Avocado"]
    )
    lookup_error: Exception | None = None
    suggest_error: Exception | None = None
    lookup_calls: list[tuple[str, float, str]] = field(default_factory=list)
    suggest_calls: list[str] = field(default_factory=list)

    async def suggest(self, query: str) -> list[str]:
        self.suggest_calls.append(query)
        if self.suggest_error is not None:
            raise self.suggest_error
        return list(self.names)

    async def lookup(self, name: str, quantity: float, unit: str) -> FoodEntry:
        self.lookup_calls.append((name, quantity, unit))
        if self.lookup_error is not None:
            raise self.lookup_error
        return self.entry


@dataclass
class GatedNutritionProvider(FakeNutritionProvider):
    """Provider whose calls block until released by the test."""

    gates: dict[str, asyncio.Event] = field(default_factory=dict)

    def _gate(self, key: str) -> asyncio.Event:
        return self.gates.setdefault(key, asyncio.Event())

    def release(self, key: str) -> None:
        self._gate(key).set()

    async def suggest(self, query: str) -> list[str]:
        self.suggest_calls.append(query)
        await self._gate(query).wait()
        return [f"{query} pie"]

    async def lookup(self, name: str, quantity: float, unit: str) -> FoodEntry:
        self.lookup_calls.append((name, quantity, unit))
        await self._gate(name).wait()
        return self.entry


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text client returning queued answers."""

    responses: list[str] = field(default_factory=list)
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self, *, prompt: str, temperature: float, max_output_tokens: int
    ) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="gemini-key", openai_api_key="openai-key")


@pytest.fixture
def provider() -> FakeNutritionProvider:
    return FakeNutritionProvider()


@pytest.fixture
def container(settings: Settings, provider: FakeNutritionProvider) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_provider=provider,
        tracker=build_tracker(provider, settings),
        close_resources=close_resources,
    )
