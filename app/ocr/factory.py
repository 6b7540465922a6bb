from functools import partial

import pytesseract

from app.config.settings import Settings
from app.ocr.extractor import ImageTextExtractor
from app.ocr.tesseract_engine import TesseractEngine


class ImageExtractorFactory:
    """Creates the OCR extractor with a per-call Tesseract engine factory."""

    @classmethod
    def create(cls, settings: Settings) -> ImageTextExtractor:
        # pytesseract keeps the binary path in module state; set it before any engine runs.
        if settings.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd
        engine_factory = partial(
            TesseractEngine,
            language=settings.ocr_language,
            config=settings.ocr_config,
        )
        return ImageTextExtractor(engine_factory=engine_factory)
