"""Opportunity operations for Google Sheets."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from ..errors import ValidationFailedError
from .client import BaseSheetsClient
from .constants import (
    DEFAULT_SOURCE,
    FIRST_DATA_ROW,
    OPPORTUNITIES_SHEET,
    OPPORTUNITY_FIELD_COLUMNS,
    OPPORTUNITY_HEADER,
)
from .models import Opportunity
from .utils import a1, col_letter, row_from_updated_range

logger = logging.getLogger(__name__)

_LAST_COL = col_letter(len(OPPORTUNITY_HEADER) - 1)


class OpportunityOperationsMixin:
    """Mixin for the fixed Opportunities tab."""

    async def _ensure_opportunities_sheet(self: BaseSheetsClient) -> None:
        await self._ensure_sheet(OPPORTUNITIES_SHEET, OPPORTUNITY_HEADER)

    async def list_opportunities(self: BaseSheetsClient) -> list[Opportunity]:
        await self._ensure_opportunities_sheet()
        rows = await self.get_values(a1(OPPORTUNITIES_SHEET, f"A:{_LAST_COL}"))
        return [
            Opportunity.from_row(idx, row)
            for idx, row in enumerate(rows[1:], start=FIRST_DATA_ROW)
            if row
        ]

    async def get_opportunity(self: BaseSheetsClient, row_number: int) -> Opportunity | None:
        await self._ensure_opportunities_sheet()
        rows = await self.get_values(
            a1(OPPORTUNITIES_SHEET, f"A{row_number}:{_LAST_COL}{row_number}")
        )
        if not rows or not any(rows[0]):
            return None
        return Opportunity.from_row(row_number, rows[0])

    async def create_opportunity(self: BaseSheetsClient, data: dict[str, Any]) -> Opportunity:
        """Append a new opportunity. createdDate is set here and never rewritten."""
        await self._ensure_opportunities_sheet()

        opportunity = Opportunity.from_dict(data)
        opportunity.created_date = date.today().isoformat()
        if not opportunity.source:
            opportunity.source = DEFAULT_SOURCE

        result = await self.append_values(
            a1(OPPORTUNITIES_SHEET, "A:A"), [opportunity.to_row()]
        )
        updated_range = result.get("updates", {}).get("updatedRange", "")
        opportunity.row_number = row_from_updated_range(updated_range) or 0

        logger.info(
            "opportunity_created",
            extra={"row": opportunity.row_number, "stage": opportunity.stage},
        )
        return opportunity

    async def update_opportunity_field(
        self: BaseSheetsClient, row_number: int, field: str, value: Any
    ) -> None:
        """Write one opportunity cell (stage, notes, amount or close date)."""
        column = OPPORTUNITY_FIELD_COLUMNS.get(field)
        if column is None:
            raise ValidationFailedError(f"Unknown opportunity field: {field}")
        if row_number < FIRST_DATA_ROW:
            raise ValidationFailedError("Header row cannot be updated")

        await self._ensure_opportunities_sheet()
        await self.update_values(a1(OPPORTUNITIES_SHEET, f"{column}{row_number}"), [[value]])
        logger.info(
            "opportunity_field_updated",
            extra={"row": row_number, "field": field},
        )
