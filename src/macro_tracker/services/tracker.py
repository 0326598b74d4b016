"""Form-level orchestration of the ledger, suggestions and add workflow."""

import logging
from dataclasses import asdict, dataclass

from macro_tracker.domain.errors import ParseError, ValidationError
from macro_tracker.domain.foods import FoodEntry, MacroDistribution, Totals
from macro_tracker.services.add_food import AddFoodWorkflow
from macro_tracker.services.ledger import FoodLedger
from macro_tracker.services.suggestions import SuggestionSession

EXPORT_FILENAME = "diet-plan.txt"
IMPORT_PARSE_MESSAGE = "Failed to import diet plan. Please check the file format."
IMPORT_INVALID_MESSAGE = "Invalid diet plan format"

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerSnapshot:
    """Everything the form needs to render."""

    query: str
    quantity: float
    unit: str
    suggestions: list[str]
    suggestions_visible: bool
    suggestion_state: str
    loading: bool
    error: str
    entries: list[FoodEntry]
    totals: Totals
    distribution: MacroDistribution

    def to_dict(self) -> dict[str, object]:
        return {
            "query": self.query,
            "quantity": self.quantity,
            "unit": self.unit,
            "suggestions": list(self.suggestions),
            "suggestions_visible": self.suggestions_visible,
            "suggestion_state": self.suggestion_state,
            "loading": self.loading,
            "error": self.error,
            "entries": [entry.model_dump() for entry in self.entries],
            "totals": asdict(self.totals),
            "distribution": asdict(self.distribution),
        }


@dataclass
class MacroTracker:
    """The single tracker session driven by the UI."""

    ledger: FoodLedger
    suggestions: SuggestionSession
    workflow: AddFoodWorkflow
    quantity: float = 100
    unit: str = "grams"

    def set_query(self, text: str) -> None:
        self.suggestions.on_query_changed(text)

    def set_quantity(self, quantity: float) -> None:
        self.quantity = quantity

    def set_unit(self, unit: str) -> None:
        self.unit = unit

    def focus(self) -> None:
        self.suggestions.on_focus()

    def blur(self) -> None:
        self.suggestions.on_blur()

    def select_suggestion(self, name: str) -> None:
        self.suggestions.on_suggestion_selected(name)

    async def add_food(self) -> FoodEntry | None:
        """Add the food currently typed into the form."""
        return await self.workflow.add_food(
            self.suggestions.query, self.quantity, self.unit
        )

    def export_ledger(self) -> str:
        """Return the ledger in export format."""
        return self.ledger.serialize()

    def import_ledger(self, content: bytes | str) -> None:
        """Replace the ledger from an uploaded file.

        Failures are recorded as the form error and re-raised; the ledger
        keeps its previous entries.
        """
        try:
            text = content.decode("utf-8-sig") if isinstance(content, bytes) else content
            self.ledger.load(text)
        except (UnicodeDecodeError, ParseError) as exc:
            _logger.warning("Diet plan import could not be parsed: %s", exc)
            self.workflow.pending.error = IMPORT_PARSE_MESSAGE
            if isinstance(exc, ParseError):
                raise
            raise ParseError("File is not UTF-8 text") from exc
        except ValidationError as exc:
            _logger.warning("Diet plan import rejected: %s", exc)
            self.workflow.pending.error = IMPORT_INVALID_MESSAGE
            raise
        self.workflow.pending.error = ""
        _logger.info("Imported %s food entries", len(self.ledger))

    def snapshot(self) -> TrackerSnapshot:
        """Return the current render state."""
        return TrackerSnapshot(
            query=self.suggestions.query,
            quantity=self.quantity,
            unit=self.unit,
            suggestions=list(self.suggestions.suggestions),
            suggestions_visible=self.suggestions.visible,
            suggestion_state=str(self.suggestions.state),
            loading=self.workflow.pending.in_flight,
            error=self.workflow.pending.error,
            entries=list(self.ledger.entries),
            totals=self.ledger.totals(),
            distribution=self.ledger.distribution(),
        )
