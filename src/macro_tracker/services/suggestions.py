"""Debounced autocomplete for the food name field."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum

from macro_tracker.services.nutrition import NutritionProvider

_logger = logging.getLogger(__name__)


class SuggestionState(StrEnum):
    """Visibility state of the suggestion dropdown."""

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    SHOWING = "showing"
    HIDDEN = "hidden"


@dataclass
class SuggestionSession:
    """State machine for query text and the suggestion list.

    Each query change bumps ``token``. A lookup only applies its result
    when its token is still current, so a slow response for an older
    query can never replace the suggestions of a newer one.
    """

    provider: NutritionProvider
    debounce_seconds: float = 0.3
    limit: int = 5
    query: str = ""
    suggestions: list[str] = field(default_factory=list)
    state: SuggestionState = SuggestionState.IDLE
    token: int = 0
    _debounce_task: asyncio.Task[None] | None = field(default=None, repr=False)
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, repr=False)

    @property
    def visible(self) -> bool:
        """Whether the dropdown should be rendered."""
        return self.state == SuggestionState.SHOWING and bool(self.suggestions)

    def on_query_changed(self, text: str) -> None:
        """Record new query text and restart the debounce timer.

        Must be called from a running event loop when ``text`` is not blank.
        """
        self.token += 1
        self.query = text
        self._cancel_debounce()
        if not text.strip():
            self._clear()
            return
        self.state = SuggestionState.DEBOUNCING
        task = asyncio.get_running_loop().create_task(
            self._debounce_then_lookup(self.token, text)
        )
        self._debounce_task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def on_suggestion_selected(self, name: str) -> None:
        """Accept a suggestion as the query text."""
        self.token += 1
        self._cancel_debounce()
        self.query = name
        self._clear()

    def on_focus(self) -> None:
        """Reopen previously fetched suggestions."""
        if self.suggestions:
            self.state = SuggestionState.SHOWING

    def on_blur(self) -> None:
        """Hide the dropdown but keep the fetched suggestions."""
        if self.state == SuggestionState.SHOWING:
            self.state = SuggestionState.HIDDEN

    def reset(self) -> None:
        """Clear the query text and suggestions."""
        self.on_suggestion_selected("")

    async def wait(self) -> None:
        """Wait for the pending debounce and any in-flight lookups to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def _clear(self) -> None:
        self.suggestions = []
        self.state = SuggestionState.IDLE

    async def _debounce_then_lookup(self, token: int, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        if token != self.token:
            return
        # Past the debounce the lookup is left to finish; staleness is
        # checked by token once it returns.
        self._debounce_task = None
        try:
            names = await self.provider.suggest(query)
        except Exception as exc:
            _logger.warning("Suggestion lookup failed for %r: %s", query, exc)
            if token == self.token:
                self._clear()
            return
        if token != self.token:
            _logger.debug("Discarding stale suggestions for %r", query)
            return
        self.suggestions = list(names[: self.limit])
        self.state = (
            SuggestionState.SHOWING if self.suggestions else SuggestionState.IDLE
        )
