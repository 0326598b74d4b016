"""In-memory food ledger with totals and import/export."""

import json
from collections.abc import Mapping, Sequence

from pydantic import ValidationError as PydanticValidationError

from macro_tracker.domain.errors import ParseError, ValidationError
from macro_tracker.domain.foods import FoodEntry, MacroDistribution, MacroShare, Totals

_CALORIES_PER_GRAM = {
    "protein": 4.0,
    "carbs": 4.0,
    "fat": 9.0,
}


class FoodLedger:
    """Ordered list of food entries owned by a single tracker session."""

    def __init__(self, entries: Sequence[FoodEntry] | None = None) -> None:
        self._entries: list[FoodEntry] = list(entries or [])

    @property
    def entries(self) -> tuple[FoodEntry, ...]:
        """Entries in insertion order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: FoodEntry) -> None:
        """Add an already validated entry to the end of the ledger."""
        self._entries.append(entry)

    def replace_all(self, entries: Sequence[object]) -> None:
        """Replace every entry, or leave the ledger untouched if any is invalid."""
        validated = _validate_entries(entries)
        self._entries = validated

    def totals(self) -> Totals:
        """Sum the entries; grams are rounded to one decimal, calories are not."""
        calories = sum(entry.calories for entry in self._entries)
        protein = sum(entry.protein for entry in self._entries)
        carbs = sum(entry.carbs for entry in self._entries)
        fat = sum(entry.fat for entry in self._entries)
        weight = sum(entry.weight for entry in self._entries)
        return Totals(
            calories=calories,
            protein=round(protein, 1),
            carbs=round(carbs, 1),
            fat=round(fat, 1),
            weight=round(weight, 1),
        )

    def distribution(self) -> MacroDistribution:
        """Return bar widths and percent-of-calories for each macro."""
        return macro_distribution(self.totals())

    def serialize(self) -> str:
        """Render the ledger as the export file format."""
        payload = [entry.model_dump() for entry in self._entries]
        return json.dumps(payload, indent=2, ensure_ascii=False)

    @staticmethod
    def deserialize(text: str) -> list[FoodEntry]:
        """Parse export-format text into entries without touching any ledger."""
        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"Not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise ValidationError("Expected a JSON array of food entries")
        return _validate_entries(payload)

    def load(self, text: str) -> None:
        """Replace the ledger with entries parsed from export-format text."""
        self._entries = self.deserialize(text)


def macro_distribution(totals: Totals) -> MacroDistribution:
    """Compute the macro split for the given totals."""
    grams = {
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fat": totals.fat,
    }
    gram_sum = sum(grams.values())
    shares: dict[str, MacroShare] = {}
    for macro, amount in grams.items():
        share = amount / gram_sum * 100 if gram_sum > 0 else None
        calorie_percent = (
            round(amount * _CALORIES_PER_GRAM[macro] / totals.calories * 100, 1)
            if totals.calories > 0
            else None
        )
        shares[macro] = MacroShare(
            grams=amount, share=share, calorie_percent=calorie_percent
        )
    return MacroDistribution(
        protein=shares["protein"],
        carbs=shares["carbs"],
        fat=shares["fat"],
    )


def _validate_entries(entries: Sequence[object]) -> list[FoodEntry]:
    validated: list[FoodEntry] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, FoodEntry):
            validated.append(entry)
            continue
        if not isinstance(entry, Mapping):
            raise ValidationError(f"Entry {index} is not an object")
        try:
            validated.append(FoodEntry.model_validate(dict(entry)))
        except PydanticValidationError as exc:
            raise ValidationError(_describe(index, exc)) from exc
    return validated


def _describe(index: int, exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "entry"
    return f"Entry {index} has invalid {field}: {first['msg']}"
