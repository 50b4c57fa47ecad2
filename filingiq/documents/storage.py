"""Authenticated access to documents kept in S3."""

from typing import Any
from urllib.parse import unquote, urlparse

import boto3

from filingiq.config.settings import Settings
from filingiq.documents.exceptions import InvalidStorageUrlError
from filingiq.documents.models import StoredObject
from filingiq.logging.logger import Log

_STORAGE_HOST_SUFFIX = "amazonaws.com"


def is_storage_url(locator: str) -> bool:
    """True for ``s3://`` URIs and S3 HTTPS URLs (virtual-hosted or path style)."""
    parsed = urlparse(locator)
    if parsed.scheme == "s3":
        return True
    if parsed.scheme not in ("http", "https"):
        return False
    host = (parsed.hostname or "").lower()
    if not host.endswith(_STORAGE_HOST_SUFFIX):
        return False
    return ".s3." in host or host.startswith("s3.") or ".s3-" in host


def parse_storage_url(url: str) -> tuple[str, str]:
    """Split an S3 URL into ``(bucket, key)``.

    Accepts ``s3://bucket/key``, ``https://bucket.s3.<region>.amazonaws.com/key``
    and ``https://s3.<region>.amazonaws.com/bucket/key``.

    Raises:
        InvalidStorageUrlError: if no bucket or key can be found.
    """
    parsed = urlparse(url)
    path = unquote(parsed.path.lstrip("/"))
    host = (parsed.hostname or "").lower()

    if parsed.scheme == "s3":
        bucket, key = parsed.netloc, path
    elif host.startswith("s3.") or host.startswith("s3-"):
        bucket, _, key = path.partition("/")
    else:
        bucket, key = host.split(".s3", 1)[0], path

    if not bucket or not key:
        raise InvalidStorageUrlError(
            f"Invalid storage URL: {url}. Expected a bucket and an object key"
        )
    return bucket, key


class S3ObjectStorage:
    """Reads object bytes with AWS credentials; the bucket is never assumed public."""

    def __init__(
        self,
        *,
        region: str,
        access_key_id: str = "",
        secret_access_key: str = "",
        client: Any | None = None,
    ) -> None:
        self._region = region
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            kwargs: dict[str, str] = {"region_name": self._region}
            if self._access_key_id and self._secret_access_key:
                kwargs["aws_access_key_id"] = self._access_key_id
                kwargs["aws_secret_access_key"] = self._secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def fetch_object_bytes(self, url: str) -> StoredObject:
        """Download one object.

        Raises:
            InvalidStorageUrlError: if the URL does not name an object.
            botocore.exceptions.ClientError: on access or lookup failures.
        """
        bucket, key = parse_storage_url(url)
        response = self._get_client().get_object(Bucket=bucket, Key=key)
        data = response["Body"].read()
        Log.debug(f"Fetched {len(data)} bytes from s3://{bucket}/{key}")
        return StoredObject(data=data, content_type=response.get("ContentType"))


def build_object_storage(settings: Settings) -> S3ObjectStorage:
    return S3ObjectStorage(
        region=settings.aws_region,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
    )
