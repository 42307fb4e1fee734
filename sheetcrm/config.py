"""Application configuration using Pydantic Settings."""

from __future__ import annotations

import base64
import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def extract_sheet_id(value: str) -> str:
    # accepts full URL or ID
    m = re.search(r"/spreadsheets/d/([a-zA-Z0-9-_]+)", value)
    return m.group(1) if m else value.strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google Sheets
    google_sheet_id: str = ""
    google_client_email: str = ""
    google_private_key: str = ""
    google_service_account_json_path: str = ""
    google_service_account_json_b64: str = ""

    # Contacts
    default_tab: str = "Sheet1"

    # Template attachments are served from here
    pdf_base_url: str = ""
    # Attachable files: file name -> label shown in messages (JSON in env)
    pdf_files: dict[str, str] = {}

    # Application
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    # Monitoring (Sentry)
    sentry_dsn: str = ""
    environment: str = "production"

    @field_validator("google_sheet_id", mode="before")
    @classmethod
    def parse_sheet_id(cls, v: Any) -> str:
        """Accept a full spreadsheet URL as well as a bare id."""
        if not v:
            return ""
        return extract_sheet_id(str(v))

    @field_validator("google_private_key", mode="before")
    @classmethod
    def unescape_private_key(cls, v: Any) -> str:
        """Keys pasted into env files usually carry literal \\n sequences."""
        if not v:
            return ""
        return str(v).replace("\\n", "\n")

    @property
    def has_google_credentials(self) -> bool:
        return bool(
            (self.google_client_email and self.google_private_key)
            or self.google_service_account_json_b64
            or self.google_service_account_json_path
        )

    @property
    def is_configured(self) -> bool:
        """True when the gateway can be built from these settings."""
        return bool(self.google_sheet_id and self.has_google_credentials)

    def get_google_credentials_info(self) -> dict:
        """Get Google service account credentials as dictionary."""
        if self.google_client_email and self.google_private_key:
            return {
                "type": "service_account",
                "client_email": self.google_client_email,
                "private_key": self.google_private_key,
                "token_uri": GOOGLE_TOKEN_URI,
            }

        if self.google_service_account_json_b64:
            decoded = base64.b64decode(self.google_service_account_json_b64)
            return json.loads(decoded)

        if self.google_service_account_json_path:
            path = Path(self.google_service_account_json_path)
            if not path.exists():
                raise FileNotFoundError(f"Service account file not found: {path}")
            return json.loads(path.read_text())

        raise ValueError("Missing Google Sheets credentials in environment variables.")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
