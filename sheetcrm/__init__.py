"""SheetCRM: contacts, opportunities and WhatsApp templates on Google Sheets."""

__version__ = "0.1.0"
