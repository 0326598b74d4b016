"""Tests for the food ledger."""

import json

import pytest

from macro_tracker.domain.errors import ParseError, ValidationError
from macro_tracker.domain.foods import FoodEntry, Totals
from macro_tracker.services.ledger import FoodLedger
from tests.conftest import banana


def _entry(name: str, **values: float) -> FoodEntry:
    fields = {"calories": 0, "protein": 0, "carbs": 0, "fat": 0, "weight": 0}
    fields.update(values)
    return FoodEntry(name=name, **fields)


def test_empty_ledger_has_zero_totals() -> None:
    assert FoodLedger().totals() == Totals()


def test_totals_sum_entries_and_round_grams() -> None:
    ledger = FoodLedger()
    ledger.append(_entry("a", calories=0.1, protein=0.1, carbs=1.25, fat=2, weight=50))
    ledger.append(_entry("b", calories=0.2, protein=0.2, carbs=1.1, fat=3, weight=70.5))

    totals = ledger.totals()

    assert totals.calories == 0.1 + 0.2
    assert totals.protein == 0.3
    assert totals.carbs == round(1.25 + 1.1, 1)
    assert totals.fat == 5
    assert totals.weight == 120.5


def test_append_preserves_insertion_order() -> None:
    ledger = FoodLedger()
    for name in ("Egg", "Rice", "Apple"):
        ledger.append(_entry(name))

    assert [entry.name for entry in ledger.entries] == ["Egg", "Rice", "Apple"]
    assert len(ledger) == 3


def test_serialize_round_trip() -> None:
    entries = [banana(), _entry("Oats", calories=389, protein=16.9, carbs=66.3, weight=100)]
    ledger = FoodLedger(entries)

    text = ledger.serialize()

    assert FoodLedger.deserialize(text) == entries
    assert text.startswith('[\n  {\n    "name": "Banana"')
    assert list(json.loads(text)[0]) == [
        "name",
        "calories",
        "protein",
        "carbs",
        "fat",
        "weight",
    ]


def test_serialize_empty_ledger() -> None:
    assert FoodLedger.deserialize(FoodLedger().serialize()) == []


def test_deserialize_rejects_malformed_json() -> None:
    with pytest.raises(ParseError):
        FoodLedger.deserialize("[{not json")


@pytest.mark.parametrize(
    "text",
    [
        '[{"name": "Egg", "calories": ' + "9" * 5000 + "}]",
        "[" * 100000 + "]" * 100000,
    ],
)
def test_load_rejects_unparseable_numbers_and_nesting(text: str) -> None:
    ledger = FoodLedger([banana()])

    with pytest.raises(ParseError):
        ledger.load(text)

    assert ledger.entries == (banana(),)


def test_deserialize_rejects_wrong_typed_field() -> None:
    with pytest.raises(ValidationError):
        FoodLedger.deserialize('[{"name":"Egg","calories":"78"}]')


@pytest.mark.parametrize(
    "payload",
    [
        '{"name": "Egg"}',
        '[{"name": "Egg", "calories": 78, "protein": 6, "carbs": 0.6, "fat": 5}]',
        '[{"name": "Egg", "calories": true, "protein": 6, "carbs": 0.6, '
        '"fat": 5, "weight": 50}]',
        '[{"name": "", "calories": 78, "protein": 6, "carbs": 0.6, '
        '"fat": 5, "weight": 50}]',
        '[{"name": "Egg", "calories": -1, "protein": 6, "carbs": 0.6, '
        '"fat": 5, "weight": 50}]',
        '["Egg"]',
    ],
)
def test_deserialize_rejects_invalid_structure(payload: str) -> None:
    with pytest.raises(ValidationError):
        FoodLedger.deserialize(payload)


def test_deserialize_ignores_unknown_keys() -> None:
    text = (
        '[{"name": "Egg", "calories": 78, "protein": 6, "carbs": 0.6, '
        '"fat": 5, "weight": 50, "note": "boiled"}]'
    )

    entries = FoodLedger.deserialize(text)

    assert entries[0].name == "Egg"
    assert "note" not in entries[0].model_dump()


def test_replace_all_failure_leaves_ledger_unchanged() -> None:
    ledger = FoodLedger([banana()])

    with pytest.raises(ValidationError):
        ledger.replace_all(
            [
                {"name": "Egg", "calories": 78, "protein": 6, "carbs": 0.6,
                 "fat": 5, "weight": 50},
                {"name": "Egg", "calories": "78"},
            ]
        )

    assert ledger.entries == (banana(),)


def test_replace_all_accepts_entries_and_mappings() -> None:
    ledger = FoodLedger([banana()])

    ledger.replace_all(
        [
            _entry("Rice", calories=130, carbs=28, weight=100),
            {"name": "Egg", "calories": 78, "protein": 6, "carbs": 0.6,
             "fat": 5, "weight": 50},
        ]
    )

    assert [entry.name for entry in ledger.entries] == ["Rice", "Egg"]
    assert ledger.totals().calories == 208


def test_load_failure_leaves_ledger_unchanged() -> None:
    ledger = FoodLedger([banana()])

    with pytest.raises(ParseError):
        ledger.load("nope")

    assert ledger.totals().calories == 105


def test_distribution_percent_of_calories() -> None:
    distribution = FoodLedger([banana()]).distribution()

    assert distribution.protein.calorie_percent == 5.0
    assert distribution.carbs.calorie_percent == 102.9
    assert distribution.fat.calorie_percent == 3.4
    assert distribution.carbs.share == pytest.approx(27 / 28.7 * 100)


def test_distribution_without_calories_has_no_percentages() -> None:
    distribution = FoodLedger([_entry("Water", protein=10)]).distribution()

    assert distribution.protein.share == 100
    assert distribution.protein.calorie_percent is None
    assert distribution.fat.calorie_percent is None


def test_distribution_of_empty_ledger() -> None:
    distribution = FoodLedger().distribution()

    assert distribution.protein.share is None
    assert distribution.protein.calorie_percent is None
