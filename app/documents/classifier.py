from app.documents.models import DocumentKind

PDF_CONTENT_TYPE = "application/pdf"
IMAGE_CONTENT_TYPE_PREFIX = "image/"


def classify(content_type: str) -> DocumentKind:
    """Route a declared content type to its extraction strategy."""
    normalized = (content_type or "").strip().lower()
    if normalized == PDF_CONTENT_TYPE:
        return DocumentKind.PDF
    if normalized.startswith(IMAGE_CONTENT_TYPE_PREFIX):
        return DocumentKind.IMAGE
    return DocumentKind.UNSUPPORTED
