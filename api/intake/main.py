from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import Settings, get_settings
from .context import AppContext, build_context
from .enrichment import SKIPPED, enrich_candidate
from .errors import InvalidPayloadError
from .mapping import build_properties, extract_application
from .schemas import INVITEE_CREATED, ErrorResult, IgnoredResult, InboundEvent, WebhookResult


logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    # httpx logs every outbound request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def _parse_event(raw: Any) -> InboundEvent:
    try:
        return InboundEvent.model_validate(raw)
    except ValidationError as exc:
        raise InvalidPayloadError(f"invalid webhook payload: {exc.error_count()} validation error(s)") from exc


async def process_event(ctx: AppContext, raw: Any) -> WebhookResult | IgnoredResult:
    if not isinstance(raw, dict):
        raise InvalidPayloadError("webhook body must be a JSON object")
    event_name = raw.get("event")
    if event_name != INVITEE_CREATED:
        logger.info("Ignoring webhook event %r", event_name)
        return IgnoredResult(event=event_name if isinstance(event_name, str) else None)

    event = _parse_event(raw)
    application = extract_application(event.payload, ctx.settings.answer_lookup)
    page_id = await ctx.notion.create_page(ctx.settings.notion_database_id, build_properties(application))

    enrichment = SKIPPED
    if application.linkedin_url:
        enrichment = await enrich_candidate(ctx, page_id, application)
    logger.info("Processed invitee %s -> page %s (enrichment: %s)", application.name, page_id, enrichment)
    return WebhookResult(recordId=page_id, candidateName=application.name, enrichment=enrichment)


def create_app(context: AppContext | None = None, settings: Settings | None = None) -> FastAPI:
    settings = context.settings if context else (settings or get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        if getattr(app.state, "context", None) is None:
            app.state.context = build_context(settings)
        yield

    app = FastAPI(title=settings.app_name, version="0.3.0", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.api_route(settings.webhook_path, methods=ALL_METHODS)
    async def calendly_webhook(request: Request, ctx: AppContext = Depends(get_context)) -> JSONResponse:
        if request.method == "OPTIONS":
            return JSONResponse(status_code=200, content={}, headers=PREFLIGHT_HEADERS)
        if request.method != "POST":
            return JSONResponse(status_code=405, content=ErrorResult(error="Method not allowed").model_dump(exclude_none=True))

        try:
            try:
                raw = await request.json()
            except ValueError as exc:
                raise InvalidPayloadError("request body is not valid JSON") from exc
            logger.debug("Received webhook: %s", json.dumps(raw, indent=2, ensure_ascii=False))
            result = await process_event(ctx, raw)
        except InvalidPayloadError as exc:
            logger.warning("Rejected webhook: %s", exc)
            return JSONResponse(status_code=400, content=ErrorResult(error="Invalid payload", message=str(exc)).model_dump())
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error processing webhook")
            return JSONResponse(status_code=500, content=ErrorResult(error="Internal server error", message=str(exc)).model_dump())
        return JSONResponse(status_code=200, content=result.model_dump())

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("intake.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=settings.debug)
