from typing import Any

import pymupdf

from billparse.layout.models import GlyphItem, PageGlyphs
from billparse.pdf.base import BasePdfRenderer, RenderedDocument
from billparse.pdf.exceptions import PdfRenderError


class PyMuPdfDocument(RenderedDocument):
    def __init__(self, doc: Any) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return int(self._doc.page_count)

    def page(self, page_number: int) -> PageGlyphs:
        try:
            page = self._doc[page_number - 1]
            height = float(page.rect.height)
            layout = page.get_text("dict")
            items = [
                self._to_glyph(span, height)
                for block in layout.get("blocks", [])
                for line in block.get("lines", [])
                for span in line.get("spans", [])
                if span.get("text", "").strip()
            ]
            return PageGlyphs(
                page_number=page_number,
                width=float(page.rect.width),
                height=height,
                items=items,
            )
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(
                f"pymupdf failed to render page {page_number}: {exc}"
            ) from exc

    def close(self) -> None:
        self._doc.close()

    @staticmethod
    def _to_glyph(span: dict[str, Any], page_height: float) -> GlyphItem:
        x0, y0, x1, y1 = (float(v) for v in span["bbox"])
        origin_x, origin_y = (float(v) for v in span.get("origin", (x0, y1)))
        return GlyphItem(
            text=span["text"].strip(),
            x=origin_x,
            y=page_height - origin_y,
            width=x1 - x0,
            height=y1 - y0,
            font_name=str(span.get("font", "")),
            font_size=float(span.get("size", 0.0)),
        )


class PyMuPdfRenderer(BasePdfRenderer):
    """Renders PDF pages into span-level glyphs using PyMuPDF."""

    def open(self, pdf_bytes: bytes) -> RenderedDocument:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
            return PyMuPdfDocument(doc)
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"pymupdf could not open document: {exc}") from exc
