import asyncio
from pathlib import Path
from urllib.parse import urlparse

import httpx

from filingiq.config.settings import Settings
from filingiq.documents.exceptions import DocumentFetchError, DocumentPathError
from filingiq.documents.models import DocumentRef, FetchedDocument, normalize_content_type
from filingiq.documents.storage import S3ObjectStorage, build_object_storage, is_storage_url
from filingiq.logging.logger import Log

# Defaults S3 and web servers report when no type was recorded at upload.
_GENERIC_CONTENT_TYPES = frozenset({"application/octet-stream", "binary/octet-stream"})


def document_file_path(document_root: Path, locator: str) -> Path:
    """Resolve a local locator (``/uploads/x.pdf`` or ``uploads/x.pdf``) under the root.

    Raises:
        DocumentPathError: if the locator points outside the root.
    """
    root = document_root.resolve()
    path = (root / locator.lstrip("/")).resolve()
    if not path.is_relative_to(root):
        raise DocumentPathError(f"Locator escapes document root: {locator}")
    return path


def _effective_mime_type(content_type: str | None, declared: str) -> str:
    reported = normalize_content_type(content_type)
    if reported is not None and reported not in _GENERIC_CONTENT_TYPES:
        return reported
    return normalize_content_type(declared) or declared


class ContentFetcher:
    """Resolves a DocumentRef to bytes from local disk, S3 or plain HTTP."""

    def __init__(
        self,
        *,
        storage: S3ObjectStorage,
        document_root: Path = Path("."),
        timeout_seconds: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._storage = storage
        self._document_root = document_root
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch(self, document: DocumentRef) -> FetchedDocument:
        """Load document bytes and the effective MIME type.

        Raises:
            DocumentFetchError: if a remote download fails.
            DocumentPathError: if a local locator escapes the document root.
            FileNotFoundError: if a local file does not exist.
        """
        if urlparse(document.locator).scheme in ("http", "https", "s3"):
            data, content_type = await self._fetch_remote(document.locator)
        else:
            data, content_type = self._read_local(document.locator), None

        mime_type = _effective_mime_type(content_type, document.mime_type)
        Log.info(f"Loaded {len(data)} bytes for {document.filename} ({mime_type})")
        return FetchedDocument(data=data, mime_type=mime_type)

    async def _fetch_remote(self, locator: str) -> tuple[bytes, str | None]:
        try:
            if is_storage_url(locator):
                stored = await asyncio.to_thread(self._storage.fetch_object_bytes, locator)
                return stored.data, stored.content_type
            return await self._download(locator)
        except Exception as exc:
            raise DocumentFetchError(f"Failed to download file: {exc}") from exc

    async def _download(self, url: str) -> tuple[bytes, str | None]:
        async with httpx.AsyncClient(
            timeout=self._timeout_seconds,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content, response.headers.get("content-type")

    def _read_local(self, locator: str) -> bytes:
        path = document_file_path(self._document_root, locator)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_bytes()


def build_content_fetcher(settings: Settings) -> ContentFetcher:
    return ContentFetcher(
        storage=build_object_storage(settings),
        document_root=settings.document_root,
        timeout_seconds=settings.download_timeout_seconds,
    )
