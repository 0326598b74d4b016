"""Food ledger domain models."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class FoodEntry(BaseModel):
    """One logged food item with its nutrient amounts for the portion eaten."""

    model_config = ConfigDict(strict=True, frozen=True, allow_inf_nan=False)

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    weight: float = Field(ge=0)


@dataclass(frozen=True)
class Totals:
    """Field-wise sums over the ledger."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    weight: float = 0.0


@dataclass(frozen=True)
class MacroShare:
    """One segment of the macro distribution bar."""

    grams: float
    share: float | None
    calorie_percent: float | None


@dataclass(frozen=True)
class MacroDistribution:
    """Protein, carbs and fat split used for the bar visualization."""

    protein: MacroShare
    carbs: MacroShare
    fat: MacroShare
