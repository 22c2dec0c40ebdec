from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from billparse.layout.models import PageGlyphs


class RenderedDocument(ABC):
    """An opened PDF whose pages can be rendered into positioned glyphs."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def page(self, page_number: int) -> PageGlyphs:
        """Render one page (1-based) into glyph items with bottom-up y.

        Raises:
            PdfRenderError: if the page cannot be rendered.
        """

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePdfRenderer(ABC):
    """Contract for all PDF rendering adapters."""

    @abstractmethod
    def open(self, pdf_bytes: bytes) -> RenderedDocument:
        """Open PDF bytes for page-by-page rendering.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            A RenderedDocument; use it as a context manager.

        Raises:
            PdfRenderError: if the document cannot be opened.
        """
