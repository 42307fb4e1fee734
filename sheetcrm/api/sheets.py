"""Spreadsheet tab endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ..errors import ValidationFailedError
from .deps import Gateway, remote_operation

router = APIRouter(tags=["sheets"])


@router.get("/sheets")
async def list_sheets(gateway: Gateway):
    with remote_operation("Failed to fetch sheets"):
        sheets = await gateway.list_tabs()
    return {"success": True, "sheets": sheets}


@router.delete("/sheets")
async def delete_sheet(gateway: Gateway, title: str | None = None):
    if not title:
        raise ValidationFailedError("Sheet title is required")

    with remote_operation("Failed to delete sheet"):
        await gateway.delete_tab(title)
    return {"success": True}
