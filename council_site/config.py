"""
Configuration and settings for the council site backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Static site
    public_dir: str = Field(default="public")
    index_document: str = Field(default="index.html")
    admin_document: str = Field(default="admin.html")
    templates_dir: str = Field(default="templates")

    # Mail relay (Gmail app password by default)
    email_user: Optional[str] = Field(default=None)
    email_pass: Optional[str] = Field(default=None)
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=587)
    smtp_start_tls: bool = Field(default=True)
    contact_recipient: str = Field(default="senate@vvu.edu.gh")
    contact_sender_name: str = Field(default="VVU SRC Contact Form")
    student_email_domain: str = Field(default="vvu.edu.gh")
    escape_contact_html: bool = Field(default=False)

    # S3-compatible storage for the published PDFs
    s3_endpoint: Optional[str] = Field(default=None)
    s3_region: Optional[str] = Field(default=None)
    s3_bucket: Optional[str] = Field(default=None)
    aws_access_key_id: Optional[str] = Field(default=None)
    aws_secret_access_key: Optional[str] = Field(default=None)
    storage_public_base_url: Optional[str] = Field(default=None)
    documents_prefix: str = Field(default="documents")

    # Admin credentials
    admin_username: str = Field(default="admin")
    admin_password: Optional[str] = Field(default=None)

    # Limits
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)
    news_teaser_length: int = Field(default=100)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    @field_validator("admin_username", "admin_password")
    @classmethod
    def credentials_must_be_ascii(cls, value: Optional[str]) -> Optional[str]:
        # HTTP Basic credentials are decoded as ASCII before comparison.
        if value is not None and not value.isascii():
            raise ValueError("admin credentials must be ASCII")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
