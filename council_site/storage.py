"""
Storage abstraction for S3-compatible object storage and in-memory testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import boto3
from botocore.config import Config


class StorageClient(Protocol):
    """Defines the operations the site needs from object storage."""

    def public_url(self, path: str) -> str:
        ...

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/pdf"
    ) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test/storage"
    stored_objects: dict = None
    fail_uploads: bool = False

    def __post_init__(self):
        if self.stored_objects is None:
            self.stored_objects = {}
        self.upload_calls = 0

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/pdf"
    ) -> None:
        self.upload_calls += 1
        if self.fail_uploads:
            raise ConnectionError("storage unavailable")
        # Overwrites any previous object at the same key.
        self.stored_objects[path] = bytes(data)


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client. Objects are written publicly readable so the
    site can link to them directly.
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    public_base_url: str = ""

    def __post_init__(self):
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id or None,
            aws_secret_access_key=self.secret_access_key or None,
            config=config,
        )
        if not self.public_base_url:
            self.public_base_url = self._default_public_base_url()

    def _default_public_base_url(self) -> str:
        if self.endpoint:
            scheme, _, host = self.endpoint.rstrip("/").partition("://")
            return f"{scheme}://{self.bucket}.{host}"
        if self.region:
            return f"https://{self.bucket}.s3.{self.region}.amazonaws.com"
        return f"https://{self.bucket}.s3.amazonaws.com"

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{path}"

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/pdf"
    ) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
            ACL="public-read",
            CacheControl="no-cache",
        )
