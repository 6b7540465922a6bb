from collections.abc import Callable

from app.documents.exceptions import InvalidDocumentError, OcrExtractionFailedError
from app.documents.models import ExtractionMethod, ExtractionResult
from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrEngineError

OcrEngineFactory = Callable[[], BaseOcrEngine]


class ImageTextExtractor:
    """Extracts raw text from raster images, one fresh OCR engine per call."""

    def __init__(self, engine_factory: OcrEngineFactory) -> None:
        self._engine_factory = engine_factory

    def extract(self, image_bytes: bytes, content_type: str) -> ExtractionResult:
        """Run OCR over an image upload.

        Raises:
            InvalidDocumentError: if the content type is not an image or the payload is empty.
            OcrExtractionFailedError: if the engine fails or recognizes no text.
        """
        if not (content_type or "").lower().startswith("image/"):
            raise InvalidDocumentError("Invalid file format. Please upload an image file.")
        if not image_bytes:
            raise InvalidDocumentError("File is empty")

        try:
            with self._engine_factory() as engine:
                text = engine.recognize(image_bytes)
        except OcrEngineError as exc:
            raise OcrExtractionFailedError(str(exc)) from exc

        if not text or not text.strip():
            raise OcrExtractionFailedError("No text extracted from image")

        Log.info(f"Extracted {len(text)} chars from image via OCR")
        return ExtractionResult(raw_text=text, method=ExtractionMethod.OCR)
