class OcrEngineError(Exception):
    """Raised when the OCR engine cannot be started or fails to recognize an image."""
