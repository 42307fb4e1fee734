"""Async HTTP client for the SheetCRM API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .sheets.models import Contact, Opportunity, Template

logger = logging.getLogger(__name__)

# Default timeout for API requests
DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


class CRMApiError(Exception):
    """Error envelope returned by the API (or a transport failure)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class CRMApiClient:
    """Thin wrapper over the HTTP surface; every call returns parsed models."""

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> CRMApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(
                method, path, params=params, json=json_data, files=files
            )
        except httpx.HTTPError as e:
            logger.error("API request failed: %s %s: %s", method, path, e)
            raise CRMApiError(0, str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error or not data.get("success", False):
            message = data.get("error") or response.reason_phrase or "Request failed"
            logger.warning("API error %s %s: %d %s", method, path, response.status_code, message)
            raise CRMApiError(response.status_code, message)
        return data

    # Sheets
    async def list_sheets(self) -> list[str]:
        data = await self._request("GET", "/sheets")
        return data.get("sheets", [])

    async def delete_sheet(self, title: str) -> None:
        await self._request("DELETE", "/sheets", params={"title": title})

    # Contacts
    async def list_contacts(self, tab: str) -> list[Contact]:
        data = await self._request("GET", "/contacts", params={"tab": tab})
        return [Contact.from_dict(c) for c in data.get("contacts", [])]

    async def update_contact(self, tab: str, row_number: int, **fields: Any) -> Contact | None:
        data = await self._request(
            "POST",
            "/contacts",
            json_data={"tabName": tab, "rowNumber": row_number, **fields},
        )
        contact = data.get("contact")
        return Contact.from_dict(contact) if contact else None

    async def delete_contacts(self, tab: str, row_numbers: list[int]) -> list[int]:
        data = await self._request(
            "DELETE",
            "/contacts",
            json_data={"tabName": tab, "rowNumbers": row_numbers},
        )
        return data.get("deleted", [])

    async def upload(self, filename: str, content: bytes) -> str:
        """Upload a CSV; returns the title of the tab it was loaded into."""
        data = await self._request(
            "POST", "/upload", files={"file": (filename, content, "text/csv")}
        )
        return data["sheetName"]

    # Opportunities
    async def list_opportunities(self) -> list[Opportunity]:
        data = await self._request("GET", "/opportunities")
        return [Opportunity.from_dict(o) for o in data.get("opportunities", [])]

    async def save_opportunity(self, payload: dict[str, Any]) -> Opportunity | None:
        """Create (no rowNumber) or update (rowNumber) an opportunity."""
        data = await self._request("POST", "/opportunities", json_data=payload)
        opportunity = data.get("opportunity")
        return Opportunity.from_dict(opportunity) if opportunity else None

    # Templates
    async def list_templates(self) -> list[Template]:
        data = await self._request("GET", "/templates")
        return [Template.from_dict(t) for t in data.get("templates", [])]

    async def list_pdfs(self) -> dict[str, str]:
        """Attachable file names mapped to their display labels."""
        data = await self._request("GET", "/templates/pdfs")
        return {p["name"]: p["label"] for p in data.get("pdfs", [])}

    async def create_template(self, payload: dict[str, Any]) -> Template:
        data = await self._request("POST", "/templates", json_data=payload)
        return Template.from_dict(data["template"])

    async def update_template(self, payload: dict[str, Any]) -> Template | None:
        data = await self._request("PUT", "/templates", json_data=payload)
        template = data.get("template")
        return Template.from_dict(template) if template else None

    async def delete_template(self, row_number: int, template_id: str | None = None) -> None:
        params: dict[str, Any] = {"rowNumber": row_number}
        if template_id:
            params["id"] = template_id
        await self._request("DELETE", "/templates", params=params)
