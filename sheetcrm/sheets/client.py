"""Base Google Sheets client with connection and tab helpers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from ..config import Settings
from ..errors import ConfigurationMissingError, SheetNotFoundError, ValidationFailedError
from .constants import FIRST_DATA_ROW, SCOPES
from .utils import a1

logger = logging.getLogger(__name__)


class BaseSheetsClient:
    """Google Sheets client bound to one spreadsheet.

    Blocking googleapiclient calls live in the ``_*_sync`` methods; the async
    wrappers run them in the default thread pool.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_info: dict[str, Any] | None = None,
        service: Any = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self._credentials_info = credentials_info
        self._service = service
        self._ensured_tabs: set[str] = set()
        self._ensure_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings):
        """Build a client from settings, failing fast on missing config."""
        if not settings.google_sheet_id:
            raise ConfigurationMissingError("Google Sheet ID not configured")
        if not settings.has_google_credentials:
            raise ConfigurationMissingError(
                "Missing Google Sheets credentials in environment variables."
            )
        return cls(
            settings.google_sheet_id,
            credentials_info=settings.get_google_credentials_info(),
        )

    def _get_credentials(self) -> Credentials:
        if not self._credentials_info:
            raise ConfigurationMissingError(
                "Missing Google Sheets credentials in environment variables."
            )
        return Credentials.from_service_account_info(self._credentials_info, scopes=SCOPES)

    @property
    def service(self):
        """Lazy-loaded Sheets service."""
        if self._service is None:
            creds = self._get_credentials()
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        return self._service

    # -------------------------------------------------------------------------
    # Low-level sync methods (blocking)
    # -------------------------------------------------------------------------
    def _get_values_sync(self, a1_range: str) -> list[list[Any]]:
        resp = (
            self.service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=a1_range)
            .execute()
        )
        return resp.get("values", [])

    def _update_values_sync(self, a1_range: str, values: list[list[Any]]) -> None:
        self.service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range,
            valueInputOption="RAW",
            body={"values": values},
        ).execute()

    def _append_values_sync(self, a1_range: str, rows: list[list[Any]]) -> dict[str, Any]:
        return (
            self.service.spreadsheets()
            .values()
            .append(
                spreadsheetId=self.spreadsheet_id,
                range=a1_range,
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": rows},
            )
            .execute()
        )

    def _batch_update_values_sync(self, data: list[dict[str, Any]]) -> None:
        """Batch update multiple ranges in a single API call."""
        if not data:
            return
        self.service.spreadsheets().values().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"valueInputOption": "RAW", "data": data},
        ).execute()

    def _batch_update_sync(self, requests: list[dict[str, Any]]) -> dict[str, Any]:
        return (
            self.service.spreadsheets()
            .batchUpdate(spreadsheetId=self.spreadsheet_id, body={"requests": requests})
            .execute()
        )

    def _get_metadata_sync(self) -> dict[str, Any]:
        return (
            self.service.spreadsheets()
            .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties")
            .execute()
        )

    # -------------------------------------------------------------------------
    # Async wrappers (run blocking IO in thread pool)
    # -------------------------------------------------------------------------
    async def get_values(self, a1_range: str) -> list[list[Any]]:
        return await asyncio.to_thread(self._get_values_sync, a1_range)

    async def update_values(self, a1_range: str, values: list[list[Any]]) -> None:
        await asyncio.to_thread(self._update_values_sync, a1_range, values)

    async def append_values(self, a1_range: str, rows: list[list[Any]]) -> dict[str, Any]:
        return await asyncio.to_thread(self._append_values_sync, a1_range, rows)

    async def batch_update_values(self, data: list[dict[str, Any]]) -> None:
        await asyncio.to_thread(self._batch_update_values_sync, data)

    async def batch_update(self, requests: list[dict[str, Any]]) -> dict[str, Any]:
        return await asyncio.to_thread(self._batch_update_sync, requests)

    async def get_metadata(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._get_metadata_sync)

    # -------------------------------------------------------------------------
    # Tab helpers
    # -------------------------------------------------------------------------
    async def list_tabs(self) -> list[str]:
        """Titles of all tabs in spreadsheet order."""
        result = await self.get_metadata()
        return [s["properties"]["title"] for s in result.get("sheets", [])]

    async def _resolve_sheet_id(self, title: str) -> int:
        """Map a tab title to the numeric sheetId used by batchUpdate."""
        result = await self.get_metadata()
        for sheet in result.get("sheets", []):
            props = sheet.get("properties", {})
            if props.get("title") == title:
                return props["sheetId"]
        raise SheetNotFoundError(title)

    async def _add_tab(self, title: str) -> None:
        await self.batch_update([{"addSheet": {"properties": {"title": title}}}])
        logger.info("sheet_added", extra={"title": title})

    async def _ensure_sheet(self, title: str, header: list[str]) -> None:
        """Create a fixed tab with its header on first access.

        Concurrent first accesses are serialised so only one addSheet is sent.
        """
        if title in self._ensured_tabs:
            return

        async with self._ensure_lock:
            if title in self._ensured_tabs:
                return

            if title not in await self.list_tabs():
                await self._add_tab(title)
                await self.update_values(a1(title, "A1"), [header])
            else:
                existing = await self.get_values(a1(title, "1:1"))
                if not existing or not existing[0]:
                    await self.update_values(a1(title, "A1"), [header])

            self._ensured_tabs.add(title)

    async def _delete_rows(self, title: str, row_numbers: list[int]) -> list[int]:
        """Delete whole rows from a tab, bottom-up so indices stay valid.

        Returns the row numbers in the order they were deleted.
        """
        ordered = sorted(set(row_numbers), reverse=True)
        if not ordered:
            return []
        if ordered[-1] < FIRST_DATA_ROW:
            raise ValidationFailedError("Header row cannot be deleted")

        sheet_id = await self._resolve_sheet_id(title)
        requests = [
            {
                "deleteDimension": {
                    "range": {
                        "sheetId": sheet_id,
                        "dimension": "ROWS",
                        "startIndex": row - 1,
                        "endIndex": row,
                    }
                }
            }
            for row in ordered
        ]
        await self.batch_update(requests)
        logger.info("rows_deleted", extra={"title": title, "rows": ordered})
        return ordered

