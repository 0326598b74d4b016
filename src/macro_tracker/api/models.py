"""Pydantic models for tracker API requests."""

from typing import Literal

from pydantic import BaseModel


class QueryUpdate(BaseModel):
    """New text of the food name field."""

    text: str


class QuantityUpdate(BaseModel):
    """New portion quantity."""

    quantity: float


class UnitUpdate(BaseModel):
    """New portion unit."""

    unit: Literal["grams", "piece"]


class SuggestionSelection(BaseModel):
    """Suggestion picked from the dropdown."""

    name: str


class AddFoodRequest(BaseModel):
    """Optional overrides for the form values used by an add."""

    name: str | None = None
    quantity: float | None = None
    unit: Literal["grams", "piece"] | None = None
