"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from typing import Annotated

import httpx
from fastapi import FastAPI, HTTPException, Path, Request, Response, status
from fastapi.responses import JSONResponse

from milk_tracker.api.models import PriceUpdate, ReasonUpdate, ReceivedUpdate
from milk_tracker.api.ui import router as ui_router
from milk_tracker.app_logging import configure_logging
from milk_tracker.containers import AppContainer
from milk_tracker.domain.months import month_label, shift_month
from milk_tracker.domain.records import DailyRecord, MilkKind
from milk_tracker.domain.stats import CalendarDay, MonthSummary, PriceConfig
from milk_tracker.services.backup import ImportFormatError, backup_filename
from milk_tracker.services.share import build_share_text, whatsapp_share_url
from milk_tracker.services.storage import StorageError

Year = Annotated[int, Path(ge=1, le=9999)]
Month = Annotated[int, Path(ge=1, le=12)]


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.load()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(ui_router)

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logger.error("Storage write failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage is unavailable; the change was not saved."},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/records/{day}")
    async def get_record(day: date, request: Request) -> dict[str, object]:
        """Return the record for a day, or its empty default."""
        state_container: AppContainer = request.app.state.container
        return state_container.record_service.get(day.isoformat()).to_wire()

    @app.put("/records/{day}/{kind}")
    async def set_received(
        day: date, kind: MilkKind, body: ReceivedUpdate, request: Request
    ) -> dict[str, object]:
        """Mark one milk as received or not received for a day."""
        state_container: AppContainer = request.app.state.container
        record = state_container.record_service.set_received(
            day.isoformat(), kind, body.received
        )
        return record.to_wire()

    @app.put("/records/{day}/{kind}/reason")
    async def set_reason(
        day: date, kind: MilkKind, body: ReasonUpdate, request: Request
    ) -> dict[str, object]:
        """Store why one milk was not received on a day."""
        state_container: AppContainer = request.app.state.container
        record = state_container.record_service.set_reason(
            day.isoformat(), kind, body.reason
        )
        return record.to_wire()

    @app.get("/prices")
    async def get_prices(request: Request) -> dict[str, float]:
        """Return the current daily prices."""
        state_container: AppContainer = request.app.state.container
        return _format_prices(state_container.price_service.current)

    @app.put("/prices")
    async def update_prices(body: PriceUpdate, request: Request) -> dict[str, float]:
        """Change one or both daily prices."""
        state_container: AppContainer = request.app.state.container
        prices = state_container.price_service.update(
            cow_price=body.cow_price, buffalo_price=body.buffalo_price
        )
        return _format_prices(prices)

    @app.get("/months/{year}/{month}")
    async def month_summary(year: Year, month: Month, request: Request) -> dict:
        """Return totals, costs and reasons for a month."""
        state_container: AppContainer = request.app.state.container
        return _format_month(state_container.stats_service.get_month(year, month))

    @app.get("/months/{year}/{month}/calendar")
    async def month_calendar(year: Year, month: Month, request: Request) -> dict:
        """Return the calendar grid of a month."""
        state_container: AppContainer = request.app.state.container
        days = state_container.stats_service.get_calendar(year, month)
        return {
            "year": year,
            "month": month,
            "label": month_label(year, month),
            "days": [_format_calendar_day(day) for day in days],
        }

    @app.get("/months/{year}/{month}/navigate")
    async def navigate_month(
        year: Year, month: Month, request: Request, offset: int = 1
    ) -> dict[str, object]:
        """Move to another month and clear the displayed summary."""
        state_container: AppContainer = request.app.state.container
        try:
            target = shift_month(year, month, offset)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Target month is out of range",
            ) from exc
        state_container.summary_service.slot.clear()
        return {
            "year": target.year,
            "month": target.month,
            "label": month_label(target.year, target.month),
            "selected": target.isoformat(),
        }

    @app.get("/months/{year}/{month}/share")
    async def share_text(year: Year, month: Month, request: Request) -> dict[str, str]:
        """Return the bill text and a WhatsApp link that shares it."""
        state_container: AppContainer = request.app.state.container
        text = build_share_text(state_container.stats_service.get_month(year, month))
        return {"text": text, "whatsapp_url": whatsapp_share_url(text)}

    @app.post("/months/{year}/{month}/share/telegram")
    async def share_telegram(
        year: Year, month: Month, request: Request
    ) -> dict[str, str]:
        """Send the bill text to the configured Telegram chat."""
        state_container: AppContainer = request.app.state.container
        share_service = state_container.share_service
        if not share_service.enabled:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Telegram sharing is not configured",
            )
        summary = state_container.stats_service.get_month(year, month)
        try:
            text = await share_service.send(summary)
        except httpx.HTTPError as exc:
            logger.exception("Failed to share bill for %s", summary.label)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Telegram did not accept the message",
            ) from exc
        return {"status": "sent", "text": text}

    @app.post("/months/{year}/{month}/summary")
    async def generate_summary(
        year: Year, month: Month, request: Request
    ) -> dict[str, object]:
        """Ask the AI service to summarize a month."""
        state_container: AppContainer = request.app.state.container
        records = state_container.stats_service.get_month_records(year, month)
        outcome = await state_container.summary_service.request(
            records,
            state_container.price_service.current,
            month_label(year, month),
        )
        return {"text": outcome.text, "applied": outcome.applied}

    @app.get("/summary")
    async def current_summary(request: Request) -> dict[str, str]:
        """Return the summary currently on display."""
        state_container: AppContainer = request.app.state.container
        return {"text": state_container.summary_service.slot.text}

    @app.get("/backup/export")
    async def export_backup(request: Request) -> Response:
        """Download every record as a JSON file."""
        state_container: AppContainer = request.app.state.container
        return Response(
            content=state_container.backup_service.export().encode("utf-8"),
            media_type="application/json",
            headers={
                "Content-Disposition": f'attachment; filename="{backup_filename()}"'
            },
        )

    @app.post("/backup/import")
    async def import_backup(request: Request) -> dict[str, object]:
        """Replace all records with an uploaded JSON backup."""
        state_container: AppContainer = request.app.state.container
        content = await request.body()
        try:
            result = state_container.backup_service.restore(content)
        except ImportFormatError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message
            ) from exc
        return {"imported": result.imported, "message": result.message}

    return app


def _format_prices(prices: PriceConfig) -> dict[str, float]:
    return {"cow_price": prices.cow_price, "buffalo_price": prices.buffalo_price}


def _format_month(summary: MonthSummary) -> dict[str, object]:
    stats = summary.stats
    return {
        "year": summary.year,
        "month": summary.month,
        "label": summary.label,
        "prices": _format_prices(summary.prices),
        "total_cow_days": stats.total_cow_days,
        "total_buffalo_days": stats.total_buffalo_days,
        "active_days": stats.active_days,
        "cow_cost": stats.cow_cost,
        "buffalo_cost": stats.buffalo_cost,
        "total_cost": stats.total_cost,
        "reasons": [_format_reason(record) for record in summary.reasons],
    }


def _format_reason(record: DailyRecord) -> dict[str, str]:
    return {
        "date": record.date,
        "cow_reason": record.visible_reason(MilkKind.COW),
        "buffalo_reason": record.visible_reason(MilkKind.BUFFALO),
    }


def _format_calendar_day(day: CalendarDay) -> dict[str, object]:
    return {
        "date": day.date,
        "weekday": day.weekday,
        "cow": day.cow,
        "buffalo": day.buffalo,
        "has_reason": day.has_reason,
        "is_today": day.is_today,
    }
