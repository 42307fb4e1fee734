"""Request dependencies and the remote-call error boundary."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, Request

from ..config import Settings
from ..errors import (
    ConfigurationMissingError,
    CRMError,
    RemoteOperationError,
)
from ..monitoring import capture_exception
from ..sheets import SheetsClient

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> SheetsClient:
    """The gateway built at startup; fails before any remote call when unset."""
    settings: Settings = request.app.state.settings
    if not settings.google_sheet_id:
        raise ConfigurationMissingError("Google Sheet ID not configured")

    gateway = request.app.state.gateway
    if gateway is None:
        raise ConfigurationMissingError(
            "Missing Google Sheets credentials in environment variables."
        )
    return gateway


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Gateway = Annotated[SheetsClient, Depends(get_gateway)]


@contextmanager
def remote_operation(failure_message: str, *, forward_detail: bool = False) -> Iterator[None]:
    """Turn gateway failures into a client-facing RemoteOperationError.

    Domain errors, including the gateway's own validation failures, pass
    through untouched. Anything else is a server-side failure.
    """
    try:
        yield
    except CRMError:
        raise
    except Exception as e:
        capture_exception(e, {"operation": failure_message})
        raise RemoteOperationError(str(e) if forward_detail else failure_message) from e
