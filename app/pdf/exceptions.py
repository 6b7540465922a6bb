class PdfExtractionError(Exception):
    """Raised when a single PDF adapter fails to read a document."""
