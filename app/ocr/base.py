from abc import ABC, abstractmethod
from types import TracebackType


class BaseOcrEngine(ABC):
    """Contract for OCR engines.

    An engine is a scoped resource: acquire it with ``with``, use it for a
    single document and let the context manager release it. Instances are
    never shared between documents.
    """

    @abstractmethod
    def open(self) -> None:
        """Acquire the underlying engine.

        Raises:
            OcrEngineError: if the engine is not available.
        """

    @abstractmethod
    def recognize(self, image_bytes: bytes) -> str:
        """Run text recognition over a raster image.

        Raises:
            OcrEngineError: if recognition fails.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the engine. Must be safe to call more than once."""

    def __enter__(self) -> "BaseOcrEngine":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
