import io
from typing import Any

import pdfplumber

from billparse.layout.models import GlyphItem, PageGlyphs
from billparse.pdf.base import BasePdfRenderer, RenderedDocument
from billparse.pdf.exceptions import PdfRenderError


class PdfPlumberDocument(RenderedDocument):
    def __init__(self, pdf: Any) -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page(self, page_number: int) -> PageGlyphs:
        try:
            page = self._pdf.pages[page_number - 1]
            height = float(page.height)
            words = page.extract_words(extra_attrs=["fontname", "size"])
            items = [self._to_glyph(word, height) for word in words]
            return PageGlyphs(
                page_number=page_number,
                width=float(page.width),
                height=height,
                items=items,
            )
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(
                f"pdfplumber failed to render page {page_number}: {exc}"
            ) from exc

    def close(self) -> None:
        self._pdf.close()

    @staticmethod
    def _to_glyph(word: dict[str, Any], page_height: float) -> GlyphItem:
        top = float(word["top"])
        bottom = float(word["bottom"])
        return GlyphItem(
            text=word["text"],
            x=float(word["x0"]),
            y=page_height - bottom,
            width=float(word["x1"]) - float(word["x0"]),
            height=bottom - top,
            font_name=str(word.get("fontname", "")),
            font_size=float(word.get("size", 0.0)),
        )


class PdfPlumberRenderer(BasePdfRenderer):
    """Renders PDF pages into word-level glyphs using pdfplumber."""

    def open(self, pdf_bytes: bytes) -> RenderedDocument:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise PdfRenderError(f"pdfplumber could not open document: {exc}") from exc
        try:
            # pages are parsed lazily; touching them surfaces broken page trees here
            _ = pdf.pages
            return PdfPlumberDocument(pdf)
        except Exception as exc:
            pdf.close()
            raise PdfRenderError(f"pdfplumber could not read page tree: {exc}") from exc
