"""Page-level state holders for contacts, the opportunity pipeline and templates.

Mutations are applied locally first, then replaced by the record the API
returns. When a call fails the list is re-fetched and the error re-raised.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from typing import Any

from . import messaging
from .client import CRMApiClient, CRMApiError
from .sheets.models import Contact, ContactStatus, Opportunity, OpportunityStage, Template

logger = logging.getLogger(__name__)

ALL_STATUSES = "All"
HTTP_CONFLICT = 409

# Opportunity attributes by API field name
_OPPORTUNITY_ATTRS = {
    "stage": "stage",
    "notes": "notes",
    "amount": "amount",
    "expectedCloseDate": "expected_close_date",
}


class ContactBoard:
    """Contacts of the current tab, with status filter and row selection."""

    def __init__(self, api: CRMApiClient, tab: str = "Sheet1"):
        self.api = api
        self.tab = tab
        self.tabs: list[str] = []
        self.contacts: list[Contact] = []
        self.selected: set[int] = set()
        self.status_filter = ALL_STATUSES

    async def load_tabs(self) -> list[str]:
        self.tabs = await self.api.list_sheets()
        if self.tabs and self.tab not in self.tabs:
            self.tab = self.tabs[0]
        return self.tabs

    async def load(self, tab: str | None = None) -> list[Contact]:
        if tab is not None and tab != self.tab:
            self.tab = tab
            self.selected.clear()
        self.contacts = await self.api.list_contacts(self.tab)
        return self.contacts

    def find(self, row_number: int) -> Contact | None:
        for contact in self.contacts:
            if contact.row_number == row_number:
                return contact
        return None

    def _put(self, contact: Contact) -> None:
        self.contacts = [
            contact if c.row_number == contact.row_number else c for c in self.contacts
        ]

    async def update(self, row_number: int, **fields: Any) -> Contact | None:
        """Edit status/comment/name/phone of one contact."""
        current = self.find(row_number)
        if current is not None:
            self._put(replace(current, **fields))

        try:
            confirmed = await self.api.update_contact(self.tab, row_number, **fields)
        except CRMApiError:
            logger.warning("contact_update_failed", extra={"tab": self.tab, "row": row_number})
            await self.load()
            raise

        if confirmed is not None:
            self._put(confirmed)
        return confirmed

    def filtered(self, status: str | None = None) -> list[Contact]:
        status = status or self.status_filter
        if status == ALL_STATUSES:
            return list(self.contacts)
        return [c for c in self.contacts if c.status == status]

    def toggle(self, row_number: int) -> None:
        if row_number in self.selected:
            self.selected.discard(row_number)
        else:
            self.selected.add(row_number)

    def select_all(self) -> None:
        """Select every contact visible under the current filter."""
        self.selected = {c.row_number for c in self.filtered()}

    def clear_selection(self) -> None:
        self.selected.clear()

    def selected_contacts(self) -> list[Contact]:
        return [c for c in self.contacts if c.row_number in self.selected]

    async def delete_selected(self) -> list[int]:
        if not self.selected:
            return []
        deleted = await self.api.delete_contacts(self.tab, sorted(self.selected))
        self.selected.clear()
        # Row numbers shift after a delete
        await self.load()
        return deleted

    async def delete_current_tab(self) -> None:
        await self.api.delete_sheet(self.tab)
        self.tabs = [t for t in self.tabs if t != self.tab]
        self.selected.clear()
        if self.tabs:
            self.tab = self.tabs[0]
            await self.load()
        else:
            self.tab = ""
            self.contacts = []

    async def upload(self, filename: str, content: bytes) -> str:
        title = await self.api.upload(filename, content)
        await self.load_tabs()
        await self.load(title)
        return title

    def status_counts(self) -> dict[str, int]:
        """Contacts per status; known statuses are always present."""
        counts = {status.value: 0 for status in ContactStatus}
        counts.update(Counter(c.status or "Unknown" for c in self.contacts))
        return counts

    def recent(self, limit: int = 5) -> list[Contact]:
        """Most recently added contacts; new rows land at the bottom."""
        return list(reversed(self.contacts))[:limit]

    def whatsapp_links(self, message: str) -> list[str]:
        """One chat link per selected contact, all with the same text."""
        return [messaging.whatsapp_link(c.phone, message) for c in self.selected_contacts()]

    def share_link(self) -> str | None:
        contacts = self.selected_contacts()
        if not contacts:
            return None
        return messaging.share_link(messaging.contacts_digest(contacts))

    def to_opportunity(self, row_number: int) -> Opportunity | None:
        contact = self.find(row_number)
        if contact is None:
            return None
        return Opportunity.from_contact(contact, self.tab)


class OpportunityPipeline:
    """Opportunities grouped by stage, with pipeline totals."""

    stages = [stage.value for stage in OpportunityStage]

    def __init__(self, api: CRMApiClient):
        self.api = api
        self.opportunities: list[Opportunity] = []

    async def load(self) -> list[Opportunity]:
        self.opportunities = await self.api.list_opportunities()
        return self.opportunities

    def find(self, row_number: int) -> Opportunity | None:
        for opportunity in self.opportunities:
            if opportunity.row_number == row_number:
                return opportunity
        return None

    def _put(self, opportunity: Opportunity) -> None:
        self.opportunities = [
            opportunity if o.row_number == opportunity.row_number else o
            for o in self.opportunities
        ]

    async def create(self, data: dict[str, Any] | Opportunity) -> Opportunity | None:
        if isinstance(data, Opportunity):
            payload = data.to_dict()
            payload.pop("rowNumber")
            payload.pop("createdDate")
        else:
            payload = {k: v for k, v in data.items() if k != "rowNumber"}

        created = await self.api.save_opportunity(payload)
        await self.load()
        return created

    async def update(self, row_number: int, **fields: Any) -> Opportunity | None:
        """Edit stage, notes, amount or expectedCloseDate."""
        unknown = set(fields) - set(_OPPORTUNITY_ATTRS)
        if unknown:
            raise ValueError(f"Unknown opportunity fields: {sorted(unknown)}")

        current = self.find(row_number)
        if current is not None:
            changes = {_OPPORTUNITY_ATTRS[k]: str(v) for k, v in fields.items()}
            self._put(replace(current, **changes))

        try:
            confirmed = await self.api.save_opportunity({"rowNumber": row_number, **fields})
        except CRMApiError:
            logger.warning("opportunity_update_failed", extra={"row": row_number})
            await self.load()
            raise

        if confirmed is not None:
            self._put(confirmed)
        return confirmed

    async def move(self, row_number: int, stage: str) -> Opportunity | None:
        """Drop an opportunity into another stage column."""
        current = self.find(row_number)
        if current is not None and current.stage == stage:
            return current
        return await self.update(row_number, stage=stage)

    def by_stage(self, stage: str) -> list[Opportunity]:
        return [o for o in self.opportunities if o.stage == stage]

    def stage_value(self, stage: str) -> float:
        return sum(o.amount_value for o in self.by_stage(stage))

    @property
    def total_value(self) -> float:
        return sum(o.amount_value for o in self.opportunities)

    @property
    def won_count(self) -> int:
        return len(self.by_stage(OpportunityStage.CLOSED_WON.value))

    @property
    def won_value(self) -> float:
        return self.stage_value(OpportunityStage.CLOSED_WON.value)

    def follow_up_link(self, row_number: int) -> str | None:
        opportunity = self.find(row_number)
        if opportunity is None:
            return None
        return messaging.whatsapp_link(
            opportunity.contact_phone, messaging.follow_up_message(opportunity)
        )


class TemplateLibrary:
    """Template list plus composition of messages for selected contacts."""

    def __init__(
        self,
        api: CRMApiClient,
        pdf_base_url: str = "",
        pdf_labels: dict[str, str] | None = None,
    ):
        self.api = api
        self.pdf_base_url = pdf_base_url
        self.pdf_labels = dict(pdf_labels or {})
        self.templates: list[Template] = []

    async def load(self) -> list[Template]:
        self.templates = await self.api.list_templates()
        return self.templates

    async def load_pdfs(self) -> dict[str, str]:
        """Attachable files and their display labels, as configured on the server."""
        self.pdf_labels = await self.api.list_pdfs()
        return self.pdf_labels

    def find(self, template_id: str) -> Template | None:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    async def _relocate(self, template: Template, error: CRMApiError) -> Template:
        """Fresh copy of a template whose row moved; re-raises when it is gone."""
        if error.status_code != HTTP_CONFLICT:
            raise error
        await self.load()
        current = self.find(template.id)
        if current is None:
            raise error
        logger.info(
            "template_relocated",
            extra={"id": template.id, "from_row": template.row_number, "to_row": current.row_number},
        )
        return current

    async def _update(self, data: dict[str, Any], template: Template) -> Template | None:
        return await self.api.update_template(
            {**data, "rowNumber": template.row_number, "id": template.id}
        )

    async def save(self, data: dict[str, Any], editing: Template | None = None) -> Template | None:
        """Create a template, or update the one being edited.

        An edit that hits a moved row is retried once at the template's new row.
        """
        if editing is None:
            saved = await self.api.create_template(data)
        else:
            try:
                saved = await self._update(data, editing)
            except CRMApiError as e:
                saved = await self._update(data, await self._relocate(editing, e))
        await self.load()
        return saved

    async def delete(self, template: Template) -> None:
        try:
            await self.api.delete_template(template.row_number, template.id)
        except CRMApiError as e:
            current = await self._relocate(template, e)
            await self.api.delete_template(current.row_number, current.id)
        await self.load()

    def compose(
        self,
        contacts: list[Contact],
        templates: list[Template],
        base_url: str | None = None,
    ) -> list[tuple[Contact, Template, str]]:
        """Chat links for every contact × template pair, contact-major."""
        base_url = self.pdf_base_url if base_url is None else base_url
        return [
            (
                contact,
                template,
                messaging.whatsapp_link(
                    contact.phone,
                    messaging.template_message(template, contact, base_url, self.pdf_labels),
                ),
            )
            for contact in contacts
            for template in templates
        ]
