"""Request bodies. Only field presence is checked beyond basic types."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CONTACT_FIELDS = ("status", "comment", "name", "phone")
OPPORTUNITY_UPDATE_FIELDS = ("stage", "notes", "amount", "expected_close_date")

# Sheets stores amounts as text; clients may send numbers
Amount = str | int | float


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactUpdate(APIModel):
    tab_name: str | None = Field(None, validation_alias=AliasChoices("tabName", "tab"))
    row_number: int | None = None
    status: str | None = None
    comment: str | None = None
    name: str | None = None
    phone: str | None = None


class ContactDelete(APIModel):
    tab_name: str | None = Field(None, validation_alias=AliasChoices("tabName", "tab"))
    row_numbers: list[int] | None = None


class OpportunityBody(APIModel):
    row_number: int | None = None
    name: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    amount: Amount | None = None
    stage: str | None = None
    expected_close_date: str | None = Field(
        None,
        validation_alias=AliasChoices("expectedCloseDate", "closeDate"),
        serialization_alias="expectedCloseDate",
    )
    notes: str | None = None
    source: str | None = None


class TemplateBody(APIModel):
    row_number: int | None = None
    id: str | None = None
    name: str | None = None
    message: str | None = None
    html_content: str | None = None
    pdf_file: str | None = None
