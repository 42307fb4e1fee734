"""WhatsApp click-to-chat link composition.

Nothing is sent from here: the links are opened by the browser, which hands
the pre-filled text to the messaging app.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from .sheets.models import Contact, Opportunity, Template

WHATSAPP_URL = "https://wa.me/"
DEFAULT_RECIPIENT_NAME = "Customer"

_NON_DIGITS = re.compile(r"\D")
_NAME_PLACEHOLDER = re.compile(r"\{\{name\}\}")
_PHONE_PLACEHOLDER = re.compile(r"\{\{phone\}\}")


def clean_phone(phone: str) -> str:
    """Digits only, as wa.me expects."""
    return _NON_DIGITS.sub("", phone or "")


def render_message(text: str, contact: Contact) -> str:
    """Fill {{name}} and {{phone}} placeholders for one contact."""
    if not text:
        return ""
    text = _NAME_PLACEHOLDER.sub(lambda _: contact.name or DEFAULT_RECIPIENT_NAME, text)
    return _PHONE_PLACEHOLDER.sub(lambda _: contact.phone or "", text)


def whatsapp_link(phone: str, text: str) -> str:
    return f"{WHATSAPP_URL}{clean_phone(phone)}?text={quote(text, safe='')}"


def share_link(text: str) -> str:
    """Link without a recipient; the user picks the chat."""
    return f"{WHATSAPP_URL}?text={quote(text, safe='')}"


def pdf_url(base_url: str, file_name: str) -> str:
    return f"{base_url.rstrip('/')}/{quote(file_name)}"


def pdf_label(file_name: str, labels: dict[str, str] | None = None) -> str:
    """Display label for an attached file.

    Configured labels win; otherwise the file name without its extension.
    """
    if labels and labels.get(file_name):
        return labels[file_name]
    return file_name.rsplit(".", 1)[0] if "." in file_name else file_name


def template_message(
    template: Template,
    contact: Contact,
    base_url: str = "",
    labels: dict[str, str] | None = None,
) -> str:
    """Rendered template text, with the attachment link appended when present."""
    message = render_message(template.message, contact)
    if template.pdf_file and base_url:
        url = pdf_url(base_url, template.pdf_file)
        message += f"\n\n📄 *{pdf_label(template.pdf_file, labels)}*\n{url}"
    return message


def contacts_digest(contacts: list[Contact]) -> str:
    """Summary of several contacts for forwarding to a colleague."""
    blocks = [
        f"*Name:* {c.name}\n*Phone:* {c.phone}\n*Status:* {c.status}\n*Comment:* {c.comment or '-'}"
        for c in contacts
    ]
    return "*Selected Contacts Details:*\n\n" + "\n\n----------------\n\n".join(blocks)


def follow_up_message(opportunity: Opportunity) -> str:
    return (
        f"Hi {opportunity.contact_name}, I wanted to follow up on our "
        f"opportunity: {opportunity.name}"
    )
