"""HTTP API: app factory, routers and the uniform error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..errors import CRMError
from ..sheets import SheetsClient
from . import contacts, opportunities, sheets, templates, upload
from .deps import AppSettings

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def crm_error_handler(request: Request, exc: CRMError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            extra={"path": request.url.path, "method": request.method, "error": exc.message},
        )
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(p) for p in e.get("loc", ())[1:]) for e in errors]
    detail = ", ".join(f for f in fields if f) or "body"
    return _error(400, f"Invalid request: {detail}")


def create_app(settings: Settings | None = None, gateway: SheetsClient | None = None) -> FastAPI:
    """Build the API with one settings object and one gateway for its lifetime."""
    settings = settings or get_settings()
    if gateway is None and settings.is_configured:
        gateway = SheetsClient.from_settings(settings)

    app = FastAPI(
        title="SheetCRM",
        description="Contacts, opportunities and message templates on Google Sheets",
    )
    app.state.settings = settings
    app.state.gateway = gateway

    app.add_exception_handler(CRMError, crm_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    for module in (contacts, opportunities, sheets, templates, upload):
        app.include_router(module.router)

    @app.get("/health")
    async def health(settings: AppSettings):
        return {"success": True, "configured": settings.is_configured}

    return app


__all__ = ["create_app"]
