class DocumentError(Exception):
    """Base exception for all document loading errors."""


class DocumentFetchError(DocumentError):
    """Raised when a remote document cannot be downloaded."""


class DocumentPathError(DocumentError):
    """Raised when a local locator resolves outside the document root."""


class DocumentTooLargeError(DocumentError):
    """Raised when a document exceeds the size accepted for analysis."""


class InvalidStorageUrlError(DocumentError):
    """Raised when an object-storage URL cannot be split into bucket and key."""
