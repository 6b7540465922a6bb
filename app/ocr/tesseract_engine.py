import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrEngineError


class TesseractEngine(BaseOcrEngine):
    """OCR engine backed by the Tesseract binary through pytesseract."""

    def __init__(self, language: str = "eng", config: str = "") -> None:
        self._language = language
        self._config = config
        self._images: list[Image.Image] = []
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrEngineError(f"Tesseract binary not available: {exc}") from exc
        self._is_open = True
        Log.debug(f"Tesseract {version} acquired (lang={self._language})")

    def recognize(self, image_bytes: bytes) -> str:
        if not self._is_open:
            raise OcrEngineError("Tesseract engine used outside of its scope")
        try:
            image = Image.open(io.BytesIO(image_bytes))
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise OcrEngineError(f"Unreadable image: {exc}") from exc
        self._images.append(image)
        try:
            # Pillow decodes lazily; force it so truncated data fails here.
            image.load()
        except (Image.DecompressionBombError, OSError) as exc:
            raise OcrEngineError(f"Unreadable image: {exc}") from exc
        try:
            return pytesseract.image_to_string(
                image, lang=self._language, config=self._config
            )
        except (
            pytesseract.TesseractError,
            pytesseract.TesseractNotFoundError,
            RuntimeError,
            OSError,
        ) as exc:
            raise OcrEngineError(f"Tesseract recognition failed: {exc}") from exc

    def close(self) -> None:
        for image in self._images:
            image.close()
        self._images.clear()
        if self._is_open:
            Log.debug("Tesseract engine released")
        self._is_open = False
