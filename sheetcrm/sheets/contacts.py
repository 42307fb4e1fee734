"""Contact and tab operations for Google Sheets."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import ValidationFailedError
from .client import BaseSheetsClient
from .constants import (
    CONTACT_FIELD_COLUMNS,
    CONTACT_HEADER,
    CONTACT_RANGE,
    DEFAULT_CONTACT_STATUS,
    FIRST_DATA_ROW,
)
from .models import Contact
from .utils import a1

logger = logging.getLogger(__name__)


class ContactOperationsMixin:
    """Mixin for contacts tabs (one uploaded batch per tab)."""

    async def list_contacts(self: BaseSheetsClient, tab: str) -> list[Contact]:
        """All contacts of a tab; row 1 is the header and is skipped."""
        rows = await self.get_values(a1(tab, CONTACT_RANGE))
        return [
            Contact.from_row(idx, row)
            for idx, row in enumerate(rows[1:], start=FIRST_DATA_ROW)
        ]

    async def get_contact(self: BaseSheetsClient, tab: str, row_number: int) -> Contact | None:
        """Read a single contact row back, None when the row is empty."""
        rows = await self.get_values(a1(tab, f"A{row_number}:D{row_number}"))
        if not rows or not any(rows[0]):
            return None
        return Contact.from_row(row_number, rows[0])

    async def update_contact_field(
        self: BaseSheetsClient,
        tab: str,
        row_number: int,
        field: str,
        value: Any,
    ) -> None:
        """Write one contact cell. Last writer wins."""
        column = CONTACT_FIELD_COLUMNS.get(field)
        if column is None:
            raise ValidationFailedError(f"Unknown contact field: {field}")
        if row_number < FIRST_DATA_ROW:
            raise ValidationFailedError("Header row cannot be updated")

        await self.update_values(a1(tab, f"{column}{row_number}"), [[value]])
        logger.info(
            "contact_field_updated",
            extra={"tab": tab, "row": row_number, "field": field},
        )

    async def create_tab(
        self: BaseSheetsClient, title: str, seed_rows: list[dict[str, Any]]
    ) -> int:
        """Create a contacts tab and seed it with header plus rows.

        The tab is created first and filled in a second call; a failure in
        between leaves an empty tab behind. Returns the number of data rows.
        """
        await self._add_tab(title)

        values = [CONTACT_HEADER] + [
            [
                row.get("name", ""),
                row.get("phone", ""),
                row.get("status") or DEFAULT_CONTACT_STATUS,
                row.get("comment") or "",
            ]
            for row in seed_rows
        ]
        await self.update_values(a1(title, "A1"), values)

        logger.info("contacts_tab_created", extra={"title": title, "rows": len(seed_rows)})
        return len(seed_rows)

    async def delete_tab(self: BaseSheetsClient, title: str) -> None:
        """Delete a tab by title; SheetNotFoundError when it does not exist."""
        sheet_id = await self._resolve_sheet_id(title)
        await self.batch_update([{"deleteSheet": {"sheetId": sheet_id}}])
        self._ensured_tabs.discard(title)
        logger.info("sheet_deleted", extra={"title": title})

    async def delete_contact_rows(
        self: BaseSheetsClient, tab: str, row_numbers: list[int]
    ) -> list[int]:
        """Delete contact rows; see BaseSheetsClient._delete_rows for ordering."""
        return await self._delete_rows(tab, row_numbers)
