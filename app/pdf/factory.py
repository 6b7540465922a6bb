from app.config.settings import Settings
from app.pdf.base import BasePdfExtractor
from app.pdf.extractor import PdfTextExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates PDF adapters and the two-strategy extractor from settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_adapter(cls, engine: str) -> BasePdfExtractor:
        engine = engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create(cls, settings: Settings) -> PdfTextExtractor:
        primary = cls.create_adapter(settings.pdf_primary_engine)
        fallback = cls.create_adapter(settings.pdf_fallback_engine)
        if primary.name == fallback.name:
            raise ValueError(
                f"PDF fallback engine must differ from primary engine '{primary.name}'"
            )
        return PdfTextExtractor(
            primary=primary,
            fallback=fallback,
            max_upload_bytes=settings.max_upload_bytes,
        )
