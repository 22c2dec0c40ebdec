from unittest.mock import patch

import pytest

from billparse.pdf.factory import PdfRendererFactory
from billparse.pdf.pdfplumber_adapter import PdfPlumberRenderer
from billparse.pdf.pymupdf_adapter import PyMuPdfRenderer


def _make_settings(pdf_engine: str):  # type: ignore[no-untyped-def]
    """Create a minimal Settings-like object with only pdf_engine."""
    with patch("billparse.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = pdf_engine
        return settings


class TestPdfRendererFactory:
    def test_creates_pdfplumber_renderer(self) -> None:
        renderer = PdfRendererFactory.create(_make_settings("pdfplumber"))
        assert isinstance(renderer, PdfPlumberRenderer)

    def test_creates_pymupdf_renderer(self) -> None:
        renderer = PdfRendererFactory.create(_make_settings("pymupdf"))
        assert isinstance(renderer, PyMuPdfRenderer)

    def test_is_case_insensitive(self) -> None:
        renderer = PdfRendererFactory.create(_make_settings("PyMuPDF"))
        assert isinstance(renderer, PyMuPdfRenderer)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfRendererFactory.create(_make_settings("unknown"))
