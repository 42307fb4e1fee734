"""Contacts endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from ..errors import ValidationFailedError
from .deps import AppSettings, Gateway, remote_operation
from .schemas import CONTACT_FIELDS, ContactDelete, ContactUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contacts"])


@router.get("/contacts")
async def list_contacts(gateway: Gateway, settings: AppSettings, tab: str | None = None):
    tab_name = tab or settings.default_tab
    with remote_operation("Failed to fetch contacts"):
        contacts = await gateway.list_contacts(tab_name)
    return {"success": True, "contacts": [c.to_dict() for c in contacts]}


@router.post("/contacts")
async def update_contact(body: ContactUpdate, gateway: Gateway):
    """Each field present in the body is written on its own.

    A failure part-way leaves the earlier writes in place.
    """
    if not body.tab_name or not body.row_number:
        raise ValidationFailedError("Missing required fields")

    fields = body.model_dump(include=set(CONTACT_FIELDS), exclude_unset=True)

    with remote_operation("Failed to update contact"):
        for field in CONTACT_FIELDS:
            if field in fields:
                value = fields[field] if fields[field] is not None else ""
                await gateway.update_contact_field(body.tab_name, body.row_number, field, value)
        contact = await gateway.get_contact(body.tab_name, body.row_number)

    return {"success": True, "contact": contact.to_dict() if contact else None}


@router.delete("/contacts")
async def delete_contacts(body: ContactDelete, gateway: Gateway):
    if not body.tab_name or body.row_numbers is None:
        raise ValidationFailedError("Missing required fields")

    with remote_operation("Failed to delete contacts"):
        deleted = await gateway.delete_contact_rows(body.tab_name, body.row_numbers)

    return {"success": True, "deleted": deleted}
