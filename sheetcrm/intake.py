"""CSV upload parsing for new contacts tabs."""

from __future__ import annotations

import io
import logging
from datetime import UTC, datetime

import pandas as pd

from .errors import ValidationFailedError
from .sheets.constants import DEFAULT_CONTACT_NAME, DEFAULT_CONTACT_STATUS

logger = logging.getLogger(__name__)

# Accepted header spellings, compared case-insensitively
NAME_COLUMNS = ["name"]
PHONE_COLUMNS = ["phone number", "phone"]
STATUS_COLUMNS = ["status"]

UPLOAD_PREFIX = "Upload_"


def _find_column(columns: list[str], candidates: list[str]) -> str | None:
    for candidate in candidates:
        if candidate in columns:
            return candidate
    return None


def _value(record: dict[str, str], column: str | None) -> str:
    if column is None:
        return ""
    return str(record.get(column, "")).strip()


def parse_contacts_csv(content: bytes) -> list[dict[str, str]]:
    """
    Parse an uploaded CSV into contact dicts with name, phone and status.
    The first line is the header; blank lines are skipped.
    """
    if not content or not content.strip():
        raise ValidationFailedError("Uploaded file is empty")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationFailedError("Uploaded file is not UTF-8 text") from e

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        logger.warning("upload_parse_failed", extra={"error": str(e)})
        raise ValidationFailedError(f"Could not parse CSV: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    columns = list(df.columns)

    name_col = _find_column(columns, NAME_COLUMNS)
    phone_col = _find_column(columns, PHONE_COLUMNS)
    status_col = _find_column(columns, STATUS_COLUMNS)

    contacts = []
    for record in df.to_dict(orient="records"):
        if not any(str(v).strip() for v in record.values()):
            continue
        contacts.append(
            {
                "name": _value(record, name_col) or DEFAULT_CONTACT_NAME,
                "phone": _value(record, phone_col),
                "status": _value(record, status_col) or DEFAULT_CONTACT_STATUS,
            }
        )

    logger.info(
        "upload_parsed",
        extra={
            "rows": len(contacts),
            "columns": {"name": name_col, "phone": phone_col, "status": status_col},
        },
    )
    return contacts


def upload_title(now: datetime | None = None) -> str:
    """Tab title for an upload, e.g. Upload_2024-05-01T09-30-00-000Z."""
    now = now or datetime.now(UTC)
    stamp = now.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return UPLOAD_PREFIX + stamp.replace(":", "-").replace(".", "-")
