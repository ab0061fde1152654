"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from council_site.config import get_settings
from council_site.mailer import InMemoryMailer, Mailer, SmtpMailer
from council_site.news import NewsStore
from council_site.storage import InMemoryStorageClient, S3StorageClient, StorageClient

logger = logging.getLogger(__name__)

_mailer: Mailer | None = None
_storage_client: StorageClient | None = None
_news_store: NewsStore | None = None


def get_mailer() -> Mailer:
    global _mailer
    if _mailer:
        return _mailer

    settings = get_settings()
    if settings.use_in_memory_backends:
        _mailer = InMemoryMailer()
    elif not settings.email_user or not settings.email_pass:
        logger.warning(
            "EMAIL_USER/EMAIL_PASS not set; contact messages will be discarded"
        )
        _mailer = InMemoryMailer(keep_outbox=False)
    else:
        _mailer = SmtpMailer(
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_pass,
            start_tls=settings.smtp_start_tls,
        )
    return _mailer


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _storage_client = InMemoryStorageClient()
    elif not settings.s3_bucket:
        logger.warning(
            "S3_BUCKET not set; uploaded documents are kept in memory only"
        )
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = S3StorageClient(
            bucket=settings.s3_bucket,
            region=settings.s3_region or "",
            endpoint=settings.s3_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.storage_public_base_url or "",
        )
    return _storage_client


def get_news_store() -> NewsStore:
    """
    Return the process-wide news store so items persist across requests.
    """
    global _news_store
    if _news_store is not None:
        return _news_store

    _news_store = NewsStore(teaser_length=get_settings().news_teaser_length)
    return _news_store
