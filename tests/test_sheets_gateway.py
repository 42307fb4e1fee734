"""Tests for the Google Sheets gateway: tabs and contacts."""

from unittest.mock import patch

import pytest

from sheetcrm.errors import ConfigurationMissingError, SheetNotFoundError, ValidationFailedError
from sheetcrm.sheets import SheetsClient
from sheetcrm.sheets.constants import CONTACT_HEADER
from sheetcrm.sheets.utils import a1, col_letter, quote_tab, row_from_updated_range


class TestRangeHelpers:
    """Tests for A1 range helpers."""

    def test_col_letter(self):
        assert col_letter(0) == "A"
        assert col_letter(8) == "I"
        assert col_letter(25) == "Z"
        assert col_letter(26) == "AA"

    def test_quote_tab_escapes_quotes(self):
        assert quote_tab("Sheet1") == "'Sheet1'"
        assert quote_tab("Bob's list") == "'Bob''s list'"

    def test_a1_with_spaces(self):
        assert a1("Upload 2024", "C5") == "'Upload 2024'!C5"

    def test_row_from_updated_range(self):
        assert row_from_updated_range("'Opportunities'!A7:I7") == 7
        assert row_from_updated_range("Templates!A12:G12") == 12
        assert row_from_updated_range("") is None


class TestClientSetup:
    """Tests for building the client from settings."""

    def test_from_settings_requires_sheet_id(self, settings):
        settings.google_sheet_id = ""
        with pytest.raises(ConfigurationMissingError, match="Sheet ID"):
            SheetsClient.from_settings(settings)

    def test_from_settings_requires_credentials(self, settings):
        settings.google_client_email = ""
        settings.google_private_key = ""
        with pytest.raises(ConfigurationMissingError, match="credentials"):
            SheetsClient.from_settings(settings)

    def test_service_is_built_lazily(self, settings):
        client = SheetsClient.from_settings(settings)
        with (
            patch("sheetcrm.sheets.client.Credentials") as creds,
            patch("sheetcrm.sheets.client.build") as build,
        ):
            assert client.service is build.return_value
            assert client.service is build.return_value

        build.assert_called_once()
        creds.from_service_account_info.assert_called_once()
        info = creds.from_service_account_info.call_args.args[0]
        assert info["client_email"] == settings.google_client_email


class TestTabs:
    """Tests for listing, creating and deleting tabs."""

    @pytest.mark.asyncio
    async def test_list_tabs_in_order(self, sheets_client, fake_service):
        fake_service.add_tab("Sheet1")
        fake_service.add_tab("Upload_2024-05-01T09-30-00-000Z")

        assert await sheets_client.list_tabs() == [
            "Sheet1",
            "Upload_2024-05-01T09-30-00-000Z",
        ]

    @pytest.mark.asyncio
    async def test_create_tab_then_list_contacts(self, sheets_client, fake_service):
        count = await sheets_client.create_tab(
            "Upload_X",
            [
                {"name": "Zed", "phone": "+1 555 0199", "status": "Interested"},
                {"name": "Yan", "phone": "+1 555 0198", "status": ""},
            ],
        )

        assert count == 2
        assert fake_service.rows("Upload_X")[0] == CONTACT_HEADER

        contacts = await sheets_client.list_contacts("Upload_X")
        assert [c.row_number for c in contacts] == [2, 3]
        assert contacts[0].name == "Zed"
        assert contacts[0].status == "Interested"
        assert contacts[1].status == "New"
        assert contacts[1].comment == ""

    @pytest.mark.asyncio
    async def test_create_existing_tab_fails(self, sheets_client, fake_service):
        fake_service.add_tab("Sheet1")
        with pytest.raises(Exception, match="already exists"):
            await sheets_client.create_tab("Sheet1", [])

    @pytest.mark.asyncio
    async def test_delete_tab(self, sheets_client, fake_service, contacts_tab):
        fake_service.add_tab("Other")

        await sheets_client.delete_tab(contacts_tab)

        assert list(fake_service.tabs) == ["Other"]

    @pytest.mark.asyncio
    async def test_delete_unknown_tab(self, sheets_client, fake_service):
        fake_service.add_tab("Sheet1")

        with pytest.raises(SheetNotFoundError) as exc_info:
            await sheets_client.delete_tab("Missing")

        assert exc_info.value.title == "Missing"
        assert exc_info.value.status_code == 404
        assert list(fake_service.tabs) == ["Sheet1"]


class TestContacts:
    """Tests for contact reads and writes."""

    @pytest.mark.asyncio
    async def test_list_contacts_row_numbers(self, sheets_client, contacts_tab):
        contacts = await sheets_client.list_contacts(contacts_tab)

        assert [c.row_number for c in contacts] == [2, 3, 4, 5, 6]
        assert contacts[0].name == "Alice"
        assert contacts[1].comment == "call back Tue"

    @pytest.mark.asyncio
    async def test_trailing_empty_comment(self, sheets_client, contacts_tab):
        contacts = await sheets_client.list_contacts(contacts_tab)
        carol = contacts[2]

        assert carol.status == "Callback"
        assert carol.comment == ""

    @pytest.mark.asyncio
    async def test_header_only_tab(self, sheets_client, fake_service):
        fake_service.add_tab("Empty", [CONTACT_HEADER])
        assert await sheets_client.list_contacts("Empty") == []

    @pytest.mark.asyncio
    async def test_list_contacts_unknown_tab(self, sheets_client, fake_service):
        with pytest.raises(Exception, match="Unable to parse range"):
            await sheets_client.list_contacts("Nope")

    @pytest.mark.asyncio
    async def test_update_writes_single_cell(self, sheets_client, fake_service, contacts_tab):
        await sheets_client.update_contact_field(contacts_tab, 5, "status", "Interested")

        assert fake_service.updated_ranges() == ["'Sheet1'!C5"]
        assert fake_service.rows(contacts_tab)[4] == ["Dan", "+1 555 0104", "Interested", "paid"]

    @pytest.mark.asyncio
    async def test_update_is_idempotent(self, sheets_client, fake_service, contacts_tab):
        await sheets_client.update_contact_field(contacts_tab, 3, "comment", "met at expo")
        first = [list(r) for r in fake_service.rows(contacts_tab)]
        await sheets_client.update_contact_field(contacts_tab, 3, "comment", "met at expo")

        assert fake_service.rows(contacts_tab) == first

    @pytest.mark.asyncio
    async def test_update_rejects_header_and_unknown_field(self, sheets_client, contacts_tab):
        with pytest.raises(ValidationFailedError, match="Header row"):
            await sheets_client.update_contact_field(contacts_tab, 1, "status", "New")
        with pytest.raises(ValidationFailedError, match="Unknown contact field"):
            await sheets_client.update_contact_field(contacts_tab, 2, "email", "a@b.c")

    @pytest.mark.asyncio
    async def test_get_contact(self, sheets_client, contacts_tab):
        contact = await sheets_client.get_contact(contacts_tab, 3)
        assert contact.name == "Bob"
        assert contact.row_number == 3

        assert await sheets_client.get_contact(contacts_tab, 40) is None

    @pytest.mark.asyncio
    async def test_delete_rows_bottom_up(self, sheets_client, fake_service, contacts_tab):
        deleted = await sheets_client.delete_contact_rows(contacts_tab, [3, 2, 5])

        assert deleted == [5, 3, 2]
        requests = fake_service.batch_requests()
        assert [r["deleteDimension"]["range"]["startIndex"] for r in requests] == [4, 2, 1]
        assert [r["deleteDimension"]["range"]["endIndex"] for r in requests] == [5, 3, 2]
        # one round trip for all rows
        assert sum(1 for name, _ in fake_service.calls if name == "batchUpdate") == 1

        remaining = await sheets_client.list_contacts(contacts_tab)
        assert [c.name for c in remaining] == ["Carol", "Eve"]
        assert [c.row_number for c in remaining] == [2, 3]

    @pytest.mark.asyncio
    async def test_delete_duplicate_rows_once(self, sheets_client, fake_service, contacts_tab):
        deleted = await sheets_client.delete_contact_rows(contacts_tab, [4, 4])

        assert deleted == [4]
        assert len(fake_service.rows(contacts_tab)) == 5

    @pytest.mark.asyncio
    async def test_delete_header_rejected(self, sheets_client, fake_service, contacts_tab):
        with pytest.raises(ValidationFailedError, match="Header row"):
            await sheets_client.delete_contact_rows(contacts_tab, [1, 2])

        assert fake_service.batch_requests() == []

    @pytest.mark.asyncio
    async def test_delete_nothing(self, sheets_client, fake_service, contacts_tab):
        assert await sheets_client.delete_contact_rows(contacts_tab, []) == []
        assert fake_service.calls == []
