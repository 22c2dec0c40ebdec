class ExtractionError(Exception):
    """Base exception for all extraction-related errors."""

    kind: str = "ExtractionError"
    fatal: bool = True


class InvalidInputKind(ExtractionError):
    """Raised when the payload is of a type the byte normalizer does not accept."""

    kind = "InvalidInputKind"


class MalformedPayload(ExtractionError):
    """Raised when decoding fails or the payload does not carry the expected magic header."""

    kind = "MalformedPayload"


class EmptyDocument(ExtractionError):
    """Raised when the document has no bytes, no pages or no extractable text."""

    kind = "EmptyDocument"


class PageExtractionFailure(ExtractionError):
    """Raised when a single page cannot be rendered. Logged and skipped."""

    kind = "PageExtractionFailure"
    fatal = False

    def __init__(self, page_number: int, reason: str) -> None:
        super().__init__(f"Page {page_number} extraction failed: {reason}")
        self.page_number = page_number


class FieldExtractionFailure(ExtractionError):
    """Raised when one field cannot be normalized. The field is omitted from the result."""

    kind = "FieldExtractionFailure"
    fatal = False

    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(f"Field '{field_name}' extraction failed: {reason}")
        self.field_name = field_name
