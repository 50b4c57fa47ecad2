class PdfExtractionError(Exception):
    """Raised when PDF bytes cannot be parsed."""
