"""
Storage abstraction for S3-compatible object storage and in-memory testing.

Holds listing videos and profile avatars. Objects are publicly readable;
`upload_bytes` returns the URL the web client stores on the document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote, unquote, urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError


@dataclass
class Upload:
    """A file received from the client, read into memory."""

    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        ...

    def public_url(self, path: str) -> str:
        ...

    def path_from_url(self, url: str) -> str:
        ...

    def delete(self, path: str) -> None:
        ...

    def presign_put(self, path: str, expires_in: int = 3600) -> str:
        ...


def _path_from_url(base_url: str, url: str) -> str:
    """Maps a stored public URL back to its object path; plain paths pass through."""
    prefix = base_url.rstrip("/") + "/"
    if url.startswith(prefix):
        return url[len(prefix):]
    parsed = urlparse(url)
    if parsed.scheme:
        return parsed.path.lstrip("/")
    return url


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test/storage"
    stored_objects: dict = None

    def __post_init__(self):
        if self.stored_objects is None:
            self.stored_objects = {}

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        self.stored_objects[path] = data
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def path_from_url(self, url: str) -> str:
        return _path_from_url(self.base_url, url)

    def delete(self, path: str) -> None:
        if path not in self.stored_objects:
            raise FileNotFoundError(path)
        del self.stored_objects[path]

    def presign_put(self, path: str, expires_in: int = 3600) -> str:
        return f"{self.base_url}/{path}?op=put&expires={expires_in}"


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client.
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
            self.public_base_url = f"https://{self.bucket}.s3.amazonaws.com"

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        self._client.put_object(
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
        )
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{quote(path)}"

    def path_from_url(self, url: str) -> str:
        return unquote(_path_from_url(self.public_base_url, url))

    def delete(self, path: str) -> None:
        # S3 deletes are idempotent; check first so callers can tell a
        # missing object apart from other failures.
        try:
            self._client.head_object(Bucket=self.bucket, Key=path)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey"):
                raise FileNotFoundError(path) from e
            raise
        self._client.delete_object(Bucket=self.bucket, Key=path)

    def presign_put(self, path: str, expires_in: int = 3600) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": self.bucket,
                "Key": path,
                "ContentType": "application/octet-stream",
            },
            ExpiresIn=expires_in,
        )
