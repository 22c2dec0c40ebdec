class PdfRenderError(Exception):
    """Raised when a PDF engine cannot open a document or render one of its pages."""
