"""Add-food workflow: provider lookup committed into the ledger."""

import logging
import math
from dataclasses import dataclass, field

from macro_tracker.domain.errors import AddInProgressError, ValidationError
from macro_tracker.domain.foods import FoodEntry
from macro_tracker.services.ledger import FoodLedger
from macro_tracker.services.nutrition import UNITS, NutritionProvider
from macro_tracker.services.suggestions import SuggestionSession

EMPTY_NAME_MESSAGE = "Please enter a food name"
LOOKUP_FAILED_MESSAGE = "Failed to fetch nutrition information. Please try again."

_logger = logging.getLogger(__name__)


@dataclass
class PendingAdd:
    """Loading and error state of the add button."""

    in_flight: bool = False
    error: str = ""


@dataclass
class AddFoodWorkflow:
    """Single-flight add-food operation.

    A call made while another lookup is in flight is rejected with
    ``AddInProgressError``; nothing is queued.
    """

    provider: NutritionProvider
    ledger: FoodLedger
    suggestions: SuggestionSession
    pending: PendingAdd = field(default_factory=PendingAdd)

    async def add_food(self, name: str, quantity: float, unit: str) -> FoodEntry | None:
        """Look up a portion and append it; returns None when the lookup fails."""
        cleaned = name.strip()
        if not cleaned:
            self.pending.error = EMPTY_NAME_MESSAGE
            raise ValidationError("empty name")
        _validate_portion(quantity, unit)
        if self.pending.in_flight:
            raise AddInProgressError("An add is already in progress")

        self.pending.in_flight = True
        self.pending.error = ""
        try:
            entry = await self.provider.lookup(cleaned, quantity, unit)
        except Exception:
            _logger.exception("Nutrition lookup failed for %r", cleaned)
            self.pending.error = LOOKUP_FAILED_MESSAGE
            return None
        finally:
            self.pending.in_flight = False

        self.ledger.append(entry)
        self.suggestions.reset()
        _logger.info(
            "Added %s: %s kcal, %s g", entry.name, entry.calories, entry.weight
        )
        return entry


def _validate_portion(quantity: float, unit: str) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise ValidationError("quantity must be a number")
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError("quantity must be positive")
    if unit not in UNITS:
        raise ValidationError(f"unit must be one of {', '.join(UNITS)}")
