"""CSV upload endpoint: every upload becomes a new contacts tab."""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, UploadFile

from ..errors import ValidationFailedError
from ..intake import parse_contacts_csv, upload_title
from .deps import Gateway, remote_operation

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/upload")
async def upload_contacts(gateway: Gateway, file: UploadFile | None = File(None)):
    if file is None:
        raise ValidationFailedError("No file uploaded")

    content = await file.read()
    rows = parse_contacts_csv(content)
    title = upload_title()

    logger.info("upload_received", extra={"upload_name": file.filename, "rows": len(rows)})

    with remote_operation("Failed to process upload"):
        count = await gateway.create_tab(title, rows)
    return {"success": True, "sheetName": title, "count": count}
