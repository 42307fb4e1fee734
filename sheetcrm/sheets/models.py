"""Data models for contacts, opportunities and templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_CONTACT_NAME,
    DEFAULT_CONTACT_STATUS,
    DEFAULT_SOURCE,
    DEFAULT_STAGE,
    OPPORTUNITY_COLUMNS,
    TEMPLATE_COLUMNS,
)
from .utils import cell


class ContactStatus(str, Enum):
    """Engagement state of a contact."""

    NEW = "New"
    INTERESTED = "Interested"
    NOT_INTERESTED = "Not Interested"
    CALLBACK = "Callback"
    COMPLETED = "Completed"


class OpportunityStage(str, Enum):
    """Sales pipeline stage of an opportunity."""

    LEAD = "Lead"
    QUALIFIED = "Qualified"
    PROPOSAL = "Proposal"
    NEGOTIATION = "Negotiation"
    CLOSED_WON = "Closed Won"
    CLOSED_LOST = "Closed Lost"


@dataclass
class Contact:
    """Contact row from a contacts tab."""

    row_number: int
    name: str = DEFAULT_CONTACT_NAME
    phone: str = ""
    status: str = DEFAULT_CONTACT_STATUS
    comment: str = ""

    @classmethod
    def from_row(cls, row_number: int, row: list[Any]) -> Contact:
        return cls(
            row_number=row_number,
            name=cell(row, 0, DEFAULT_CONTACT_NAME),
            phone=cell(row, 1),
            status=cell(row, 2, DEFAULT_CONTACT_STATUS),
            comment=cell(row, 3),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Contact:
        return cls(
            row_number=int(data["rowNumber"]),
            name=data.get("name") or DEFAULT_CONTACT_NAME,
            phone=data.get("phone") or "",
            status=data.get("status") or DEFAULT_CONTACT_STATUS,
            comment=data.get("comment") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rowNumber": self.row_number,
            "name": self.name,
            "phone": self.phone,
            "status": self.status,
            "comment": self.comment,
        }


@dataclass
class Opportunity:
    """Opportunity row from the Opportunities tab."""

    row_number: int
    name: str
    contact_name: str = ""
    contact_phone: str = ""
    amount: str = ""
    stage: str = DEFAULT_STAGE
    expected_close_date: str = ""
    notes: str = ""
    created_date: str = ""
    source: str = ""

    @classmethod
    def from_row(cls, row_number: int, row: list[Any]) -> Opportunity:
        values = {key: cell(row, idx) for idx, key in enumerate(OPPORTUNITY_COLUMNS)}
        return cls.from_dict({**values, "rowNumber": row_number})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Opportunity:
        return cls(
            row_number=int(data.get("rowNumber") or 0),
            name=str(data.get("name") or ""),
            contact_name=str(data.get("contactName") or ""),
            contact_phone=str(data.get("contactPhone") or ""),
            amount=str(data.get("amount") or ""),
            stage=str(data.get("stage") or DEFAULT_STAGE),
            expected_close_date=str(data.get("expectedCloseDate") or ""),
            notes=str(data.get("notes") or ""),
            created_date=str(data.get("createdDate") or ""),
            source=str(data.get("source") or ""),
        )

    @classmethod
    def from_contact(cls, contact: Contact, tab: str = "") -> Opportunity:
        """Prefill a new opportunity from a contact (not yet persisted)."""
        return cls(
            row_number=0,
            name=contact.name,
            contact_name=contact.name,
            contact_phone=contact.phone,
            notes=contact.comment,
            source=f"Contacts: {tab}" if tab else DEFAULT_SOURCE,
        )

    @property
    def amount_value(self) -> float:
        """Numeric amount; blanks and free text count as zero."""
        try:
            return float(self.amount.replace(",", "").strip() or 0)
        except ValueError:
            return 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "rowNumber": self.row_number,
            "name": self.name,
            "contactName": self.contact_name,
            "contactPhone": self.contact_phone,
            "amount": self.amount,
            "stage": self.stage,
            "expectedCloseDate": self.expected_close_date,
            "notes": self.notes,
            "createdDate": self.created_date,
            "source": self.source,
        }

    def to_row(self) -> list[str]:
        data = self.to_dict()
        return [data[key] for key in OPPORTUNITY_COLUMNS]


@dataclass
class Template:
    """Message template row from the Templates tab."""

    row_number: int
    id: str
    name: str
    message: str
    html_content: str = ""
    created_date: str = ""
    modified_date: str = ""
    pdf_file: str = ""

    @classmethod
    def from_row(cls, row_number: int, row: list[Any]) -> Template:
        values = {key: cell(row, idx) for idx, key in enumerate(TEMPLATE_COLUMNS)}
        return cls.from_dict({**values, "rowNumber": row_number})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Template:
        return cls(
            row_number=int(data.get("rowNumber") or 0),
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            message=str(data.get("message") or ""),
            html_content=str(data.get("htmlContent") or ""),
            created_date=str(data.get("createdDate") or ""),
            modified_date=str(data.get("modifiedDate") or ""),
            pdf_file=str(data.get("pdfFile") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rowNumber": self.row_number,
            "id": self.id,
            "name": self.name,
            "message": self.message,
            "htmlContent": self.html_content,
            "createdDate": self.created_date,
            "modifiedDate": self.modified_date,
            "pdfFile": self.pdf_file,
        }

    def to_row(self) -> list[str]:
        data = self.to_dict()
        return [data[key] for key in TEMPLATE_COLUMNS]

