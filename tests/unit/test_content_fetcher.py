from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from filingiq.documents.exceptions import DocumentFetchError, DocumentPathError
from filingiq.documents.fetcher import ContentFetcher, document_file_path
from filingiq.documents.models import DocumentRef, StoredObject
from filingiq.documents.storage import S3ObjectStorage

S3_URL = "https://intake-bucket.s3.us-east-1.amazonaws.com/intakes/w2.png"


def _make_document(locator: str, mime_type: str = "application/pdf") -> DocumentRef:
    return DocumentRef(filename="w2.pdf", locator=locator, mime_type=mime_type)


def _make_fetcher(
    tmp_path: Path,
    storage: MagicMock | None = None,
    handler: object | None = None,
) -> ContentFetcher:
    transport = httpx.MockTransport(handler) if handler is not None else None  # type: ignore[arg-type]
    return ContentFetcher(
        storage=storage or MagicMock(spec=S3ObjectStorage),
        document_root=tmp_path,
        transport=transport,
    )


class TestDocumentFilePath:
    def test_strips_leading_slash(self, tmp_path: Path) -> None:
        path = document_file_path(tmp_path, "/uploads/w2.pdf")
        assert path == (tmp_path / "uploads" / "w2.pdf").resolve()

    def test_rejects_escape_from_root(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentPathError, match="escapes"):
            document_file_path(tmp_path, "../../etc/passwd")


class TestLocalFiles:
    @pytest.mark.asyncio
    async def test_reads_bytes_relative_to_root(self, tmp_path: Path) -> None:
        (tmp_path / "uploads").mkdir()
        (tmp_path / "uploads" / "w2.pdf").write_bytes(b"%PDF test content")
        fetcher = _make_fetcher(tmp_path)

        fetched = await fetcher.fetch(_make_document("/uploads/w2.pdf"))

        assert fetched.data == b"%PDF test content"
        assert fetched.mime_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        fetcher = _make_fetcher(tmp_path)
        with pytest.raises(FileNotFoundError, match="missing.pdf"):
            await fetcher.fetch(_make_document("/uploads/missing.pdf"))


class TestStorageUrls:
    @pytest.mark.asyncio
    async def test_uses_authenticated_storage(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=S3ObjectStorage)
        storage.fetch_object_bytes.return_value = StoredObject(
            data=b"\x89PNG", content_type="image/png"
        )

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("anonymous HTTP must not be used for storage URLs")

        fetcher = _make_fetcher(tmp_path, storage=storage, handler=handler)
        fetched = await fetcher.fetch(_make_document(S3_URL, mime_type="image/jpeg"))

        storage.fetch_object_bytes.assert_called_once_with(S3_URL)
        assert fetched.data == b"\x89PNG"
        assert fetched.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_falls_back_to_declared_type(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=S3ObjectStorage)
        storage.fetch_object_bytes.return_value = StoredObject(data=b"x", content_type=None)
        fetcher = _make_fetcher(tmp_path, storage=storage)

        fetched = await fetcher.fetch(_make_document(S3_URL, mime_type="image/jpeg"))

        assert fetched.mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_generic_stored_type_ignored(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=S3ObjectStorage)
        storage.fetch_object_bytes.return_value = StoredObject(
            data=b"%PDF", content_type="binary/octet-stream"
        )
        fetcher = _make_fetcher(tmp_path, storage=storage)

        fetched = await fetcher.fetch(_make_document(S3_URL))

        assert fetched.mime_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_storage_failure_wrapped(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=S3ObjectStorage)
        storage.fetch_object_bytes.side_effect = RuntimeError("AccessDenied")
        fetcher = _make_fetcher(tmp_path, storage=storage)

        with pytest.raises(DocumentFetchError, match="Failed to download file: AccessDenied"):
            await fetcher.fetch(_make_document(S3_URL))


class TestHttpUrls:
    @pytest.mark.asyncio
    async def test_downloads_and_uses_content_type(self, tmp_path: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == "https://files.example.com/w2.pdf"
            return httpx.Response(
                200,
                content=b"%PDF-1.7",
                headers={"content-type": "application/pdf; charset=binary"},
            )

        storage = MagicMock(spec=S3ObjectStorage)
        fetcher = _make_fetcher(tmp_path, storage=storage, handler=handler)
        fetched = await fetcher.fetch(
            _make_document("https://files.example.com/w2.pdf", mime_type="image/png")
        )

        storage.fetch_object_bytes.assert_not_called()
        assert fetched.data == b"%PDF-1.7"
        assert fetched.mime_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self, tmp_path: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403)

        fetcher = _make_fetcher(tmp_path, handler=handler)
        with pytest.raises(DocumentFetchError, match="Failed to download file"):
            await fetcher.fetch(_make_document("https://files.example.com/w2.pdf"))
