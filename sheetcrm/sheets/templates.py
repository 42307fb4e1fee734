"""Message template operations for Google Sheets."""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

from ..errors import ConflictError, ValidationFailedError
from .client import BaseSheetsClient
from .constants import FIRST_DATA_ROW, TEMPLATE_HEADER, TEMPLATES_SHEET
from .models import Template
from .utils import a1, col_letter, row_from_updated_range

logger = logging.getLogger(__name__)

_LAST_COL = col_letter(len(TEMPLATE_HEADER) - 1)


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _generate_template_id() -> str:
    """Millisecond timestamp; used for selection, never for row lookup."""
    return str(int(time.time() * 1000))


class TemplateOperationsMixin:
    """Mixin for the fixed Templates tab."""

    async def _ensure_templates_sheet(self: BaseSheetsClient) -> None:
        await self._ensure_sheet(TEMPLATES_SHEET, TEMPLATE_HEADER)

    async def list_templates(self: BaseSheetsClient) -> list[Template]:
        await self._ensure_templates_sheet()
        rows = await self.get_values(a1(TEMPLATES_SHEET, f"A:{_LAST_COL}"))
        return [
            Template.from_row(idx, row)
            for idx, row in enumerate(rows[1:], start=FIRST_DATA_ROW)
            if row
        ]

    async def get_template(self: BaseSheetsClient, row_number: int) -> Template | None:
        await self._ensure_templates_sheet()
        rows = await self.get_values(
            a1(TEMPLATES_SHEET, f"A{row_number}:{_LAST_COL}{row_number}")
        )
        if not rows or not any(rows[0]):
            return None
        return Template.from_row(row_number, rows[0])

    async def find_template_row(self: BaseSheetsClient, template_id: str) -> int | None:
        """Current row of the template with this id, wherever it has moved."""
        for template in await self.list_templates():
            if template.id == template_id:
                return template.row_number
        return None

    async def create_template(self: BaseSheetsClient, data: dict[str, Any]) -> Template:
        await self._ensure_templates_sheet()

        now = _now()
        template = Template(
            row_number=0,
            id=_generate_template_id(),
            name=str(data.get("name") or ""),
            message=str(data.get("message") or ""),
            html_content=str(data.get("htmlContent") or ""),
            created_date=now,
            modified_date=now,
            pdf_file=str(data.get("pdfFile") or ""),
        )

        result = await self.append_values(a1(TEMPLATES_SHEET, "A:A"), [template.to_row()])
        updated_range = result.get("updates", {}).get("updatedRange", "")
        template.row_number = row_from_updated_range(updated_range) or 0

        logger.info("template_created", extra={"id": template.id, "row": template.row_number})
        return template

    async def _check_template_id(
        self: BaseSheetsClient, row_number: int, expected_id: str | None
    ) -> None:
        if not expected_id:
            return
        current = await self.get_template(row_number)
        if current is not None and current.id == expected_id:
            return

        moved_to = await self.find_template_row(expected_id)
        if moved_to is None:
            raise ConflictError(f"Template {expected_id} no longer exists")
        raise ConflictError(
            f"Template {expected_id} is no longer at row {row_number} (now at row {moved_to})"
        )

    async def update_template(
        self: BaseSheetsClient,
        row_number: int,
        data: dict[str, Any],
        expected_id: str | None = None,
    ) -> Template | None:
        """Rewrite name, message and rich content; bumps modifiedDate.

        pdfFile is only touched when the caller sends it.
        """
        if row_number < FIRST_DATA_ROW:
            raise ValidationFailedError("Header row cannot be updated")
        await self._check_template_id(row_number, expected_id)

        updates = [
            {
                "range": a1(TEMPLATES_SHEET, f"B{row_number}:D{row_number}"),
                "values": [[data.get("name", ""), data.get("message", ""), data.get("htmlContent") or ""]],
            },
            {
                "range": a1(TEMPLATES_SHEET, f"F{row_number}"),
                "values": [[_now()]],
            },
        ]
        if "pdfFile" in data:
            updates.append(
                {
                    "range": a1(TEMPLATES_SHEET, f"G{row_number}"),
                    "values": [[data.get("pdfFile") or ""]],
                }
            )

        await self._ensure_templates_sheet()
        await self.batch_update_values(updates)
        logger.info("template_updated", extra={"row": row_number})
        return await self.get_template(row_number)

    async def delete_template(
        self: BaseSheetsClient, row_number: int, expected_id: str | None = None
    ) -> None:
        await self._ensure_templates_sheet()
        await self._check_template_id(row_number, expected_id)
        await self._delete_rows(TEMPLATES_SHEET, [row_number])
        logger.info("template_deleted", extra={"row": row_number})
