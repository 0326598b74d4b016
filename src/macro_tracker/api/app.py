"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from macro_tracker.api.models import (
    AddFoodRequest,
    QuantityUpdate,
    QueryUpdate,
    SuggestionSelection,
    UnitUpdate,
)
from macro_tracker.api.ui import router as ui_router
from macro_tracker.app_logging import configure_logging
from macro_tracker.containers import AppContainer
from macro_tracker.domain.errors import (
    AddInProgressError,
    ParseError,
    ValidationError,
)
from macro_tracker.services.tracker import EXPORT_FILENAME, MacroTracker


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close provider resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(ui_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def get_state(request: Request) -> dict[str, object]:
        """Return everything the form renders."""
        return _tracker(request).snapshot().to_dict()

    @app.put("/query")
    async def set_query(update: QueryUpdate, request: Request) -> dict[str, object]:
        """Update the food name field and schedule suggestions."""
        tracker = _tracker(request)
        tracker.set_query(update.text)
        return tracker.snapshot().to_dict()

    @app.post("/query/focus")
    async def focus_query(request: Request) -> dict[str, object]:
        """Reopen the suggestion dropdown."""
        tracker = _tracker(request)
        tracker.focus()
        return tracker.snapshot().to_dict()

    @app.post("/query/blur")
    async def blur_query(request: Request) -> dict[str, object]:
        """Hide the suggestion dropdown."""
        tracker = _tracker(request)
        tracker.blur()
        return tracker.snapshot().to_dict()

    @app.put("/quantity")
    async def set_quantity(
        update: QuantityUpdate, request: Request
    ) -> dict[str, object]:
        """Update the portion quantity."""
        tracker = _tracker(request)
        tracker.set_quantity(update.quantity)
        return tracker.snapshot().to_dict()

    @app.put("/unit")
    async def set_unit(update: UnitUpdate, request: Request) -> dict[str, object]:
        """Update the portion unit."""
        tracker = _tracker(request)
        tracker.set_unit(update.unit)
        return tracker.snapshot().to_dict()

    @app.post("/suggestions/select")
    async def select_suggestion(
        selection: SuggestionSelection, request: Request
    ) -> dict[str, object]:
        """Accept a suggestion as the food name."""
        tracker = _tracker(request)
        tracker.select_suggestion(selection.name)
        return tracker.snapshot().to_dict()

    @app.post("/foods")
    async def add_food(
        request: Request, overrides: AddFoodRequest | None = None
    ) -> dict[str, object]:
        """Look up the typed food and append it to the ledger."""
        tracker = _tracker(request)
        if overrides is not None:
            if overrides.name is not None:
                tracker.select_suggestion(overrides.name)
            if overrides.quantity is not None:
                tracker.set_quantity(overrides.quantity)
            if overrides.unit is not None:
                tracker.set_unit(overrides.unit)
        try:
            entry = await tracker.add_food()
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        except AddInProgressError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=tracker.workflow.pending.error,
            )
        return tracker.snapshot().to_dict()

    @app.get("/ledger/export")
    async def export_ledger(request: Request) -> Response:
        """Download the ledger as a diet plan file."""
        return Response(
            content=_tracker(request).export_ledger(),
            media_type="text/plain; charset=utf-8",
            headers={
                "Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'
            },
        )

    @app.post("/ledger/import")
    async def import_ledger(request: Request) -> dict[str, object]:
        """Replace the ledger with the uploaded diet plan file."""
        tracker = _tracker(request)
        content = await request.body()
        try:
            tracker.import_ledger(content)
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=tracker.workflow.pending.error,
            ) from exc
        except ValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=tracker.workflow.pending.error,
            ) from exc
        return tracker.snapshot().to_dict()

    return app


def _tracker(request: Request) -> MacroTracker:
    container: AppContainer = request.app.state.container
    return container.tracker
