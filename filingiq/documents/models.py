from dataclasses import dataclass
from typing import Literal

ImageFormat = Literal["png", "jpeg"]

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class DocumentRef:
    """Pointer to one uploaded document, created by the upload collaborator."""

    filename: str
    locator: str  # local path under the document root, or a remote URL
    mime_type: str


@dataclass(frozen=True)
class FetchedDocument:
    """Raw bytes of a document and the MIME type they should be treated as."""

    data: bytes
    mime_type: str

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE


@dataclass(frozen=True)
class StoredObject:
    """Object body and content-type header returned by object storage."""

    data: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class TextContent:
    """Text transcript extracted from a PDF."""

    value: str


@dataclass(frozen=True)
class ImageContent:
    """Base64-encoded image payload."""

    base64: str
    format: ImageFormat

    @property
    def data_uri(self) -> str:
        return f"data:image/{self.format};base64,{self.base64}"


ExtractedContent = TextContent | ImageContent


def image_format_for(mime_type: str) -> ImageFormat:
    """Map a MIME type onto the image format sent to the model."""
    return "png" if "png" in mime_type.lower() else "jpeg"


def normalize_content_type(content_type: str | None) -> str | None:
    """Strip parameters from a content-type header (``image/png; q=1`` -> ``image/png``)."""
    if not content_type:
        return None
    value = content_type.split(";", 1)[0].strip().lower()
    return value or None
