"""Google Sheets gateway package.

This package provides a modular client for Google Sheets operations:
- client.py: Base client with connection, async wrappers and tab helpers
- contacts.py: Contacts tabs (list, single-cell edits, bulk delete, seeding)
- opportunities.py: Opportunities tab
- templates.py: Message templates tab
- utils.py: A1 range helpers
- constants.py: Column layouts and fixed tab names
- models.py: Data models
"""

from .client import BaseSheetsClient
from .constants import (
    CONTACT_FIELD_COLUMNS,
    CONTACT_HEADER,
    OPPORTUNITIES_SHEET,
    OPPORTUNITY_FIELD_COLUMNS,
    SCOPES,
    TEMPLATES_SHEET,
)
from .contacts import ContactOperationsMixin
from .models import Contact, ContactStatus, Opportunity, OpportunityStage, Template
from .opportunities import OpportunityOperationsMixin
from .templates import TemplateOperationsMixin


class SheetsClient(
    BaseSheetsClient,
    ContactOperationsMixin,
    OpportunityOperationsMixin,
    TemplateOperationsMixin,
):
    """Full-featured Google Sheets client combining all operations."""

    pass


__all__ = [
    "SheetsClient",
    "BaseSheetsClient",
    "ContactOperationsMixin",
    "OpportunityOperationsMixin",
    "TemplateOperationsMixin",
    "Contact",
    "ContactStatus",
    "Opportunity",
    "OpportunityStage",
    "Template",
    "SCOPES",
    "CONTACT_HEADER",
    "CONTACT_FIELD_COLUMNS",
    "OPPORTUNITY_FIELD_COLUMNS",
    "OPPORTUNITIES_SHEET",
    "TEMPLATES_SHEET",
]
