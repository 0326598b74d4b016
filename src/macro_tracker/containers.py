"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from macro_tracker.adapters.gemini_client import HttpxGeminiClient
from macro_tracker.adapters.openai_client import OpenAITextClient
from macro_tracker.config import Settings
from macro_tracker.services.add_food import AddFoodWorkflow
from macro_tracker.services.cache import InMemoryCache
from macro_tracker.services.ledger import FoodLedger
from macro_tracker.services.nutrition import LlmNutritionProvider, NutritionProvider
from macro_tracker.services.suggestions import SuggestionSession
from macro_tracker.services.tracker import MacroTracker


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_provider: NutritionProvider
    tracker: MacroTracker
    close_resources: Callable[[], Awaitable[None]]


def build_tracker(provider: NutritionProvider, settings: Settings) -> MacroTracker:
    """Create a tracker session around a nutrition provider."""
    ledger = FoodLedger()
    suggestions = SuggestionSession(
        provider=provider,
        debounce_seconds=settings.suggestion_debounce_ms / 1000,
        limit=settings.suggestion_limit,
    )
    workflow = AddFoodWorkflow(
        provider=provider, ledger=ledger, suggestions=suggestions
    )
    return MacroTracker(
        ledger=ledger,
        suggestions=suggestions,
        workflow=workflow,
        quantity=settings.default_quantity,
        unit=settings.default_unit,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    client: HttpxGeminiClient | OpenAITextClient
    if resolved_settings.nutrition_backend == "openai":
        client = OpenAITextClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
        )
    else:
        client = HttpxGeminiClient.create(
            api_key=resolved_settings.gemini_api_key or "",
            model=resolved_settings.gemini_model,
            base_url=resolved_settings.gemini_base_url,
        )
    provider = LlmNutritionProvider(
        client=client,
        cache=InMemoryCache(),
        suggestion_limit=resolved_settings.suggestion_limit,
        suggestion_ttl_seconds=resolved_settings.suggestion_cache_ttl_seconds,
    )
    tracker = build_tracker(provider, resolved_settings)

    async def close_resources() -> None:
        await client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_provider=provider,
        tracker=tracker,
        close_resources=close_resources,
    )
