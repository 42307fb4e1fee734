"""Constants for Google Sheets operations."""

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
]

# Row 1 of every tab is the header
HEADER_ROWS = 1
FIRST_DATA_ROW = HEADER_ROWS + 1

# Contacts tabs: Name, Phone, Status, Comment
CONTACT_HEADER = ["Name", "Phone Number", "Status", "Comment"]
CONTACT_RANGE = "A:D"
CONTACT_FIELD_COLUMNS = {
    "name": "A",
    "phone": "B",
    "status": "C",
    "comment": "D",
}
DEFAULT_CONTACT_NAME = "Unknown"
DEFAULT_CONTACT_STATUS = "New"

# Opportunities tab
OPPORTUNITIES_SHEET = "Opportunities"
OPPORTUNITY_COLUMNS = [
    "name",
    "contactName",
    "contactPhone",
    "amount",
    "stage",
    "expectedCloseDate",
    "notes",
    "createdDate",
    "source",
]
OPPORTUNITY_HEADER = [
    "Name",
    "Contact Name",
    "Contact Phone",
    "Amount",
    "Stage",
    "Expected Close Date",
    "Notes",
    "Created Date",
    "Source",
]
OPPORTUNITY_FIELD_COLUMNS = {
    "amount": "D",
    "stage": "E",
    "expectedCloseDate": "F",
    "closeDate": "F",
    "notes": "G",
}
DEFAULT_STAGE = "Lead"
DEFAULT_SOURCE = "Manual Entry"

# Templates tab
TEMPLATES_SHEET = "Templates"
TEMPLATE_COLUMNS = [
    "id",
    "name",
    "message",
    "htmlContent",
    "createdDate",
    "modifiedDate",
    "pdfFile",
]
TEMPLATE_HEADER = [
    "ID",
    "Name",
    "Message",
    "HTML Content",
    "Created Date",
    "Modified Date",
    "PDF File",
]
