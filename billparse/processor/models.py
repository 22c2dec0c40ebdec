from dataclasses import dataclass, field

from billparse.layout.models import Page
from billparse.scoring.confidence import Confidence


@dataclass
class ExtractionResult:
    """Outcome of one extraction call.

    A failed result never carries fields; a successful one always has text.
    """

    success: bool
    text: str = ""
    pages: list[Page] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)
    confidence: Confidence | None = None
    error: str | None = None
    error_kind: str | None = None
    language: str | None = None
    skipped_pages: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.success and self.fields:
            raise ValueError("A failed ExtractionResult must not carry fields")
        if self.success and not self.text:
            raise ValueError("A successful ExtractionResult must carry text")

    @classmethod
    def failure(cls, error: str, error_kind: str, language: str | None = None) -> "ExtractionResult":
        return cls(success=False, error=error, error_kind=error_kind, language=language)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "language": self.language,
            "fields": dict(self.fields),
            "confidence": (
                {
                    "fields": dict(self.confidence.fields),
                    "overall": self.confidence.overall,
                    "scored_fields": self.confidence.scored_fields,
                }
                if self.confidence is not None
                else None
            ),
            "error": self.error,
            "error_kind": self.error_kind,
            "skipped_pages": list(self.skipped_pages),
            "pages": [
                {
                    "page_number": page.page_number,
                    "width": page.width,
                    "height": page.height,
                    "lines": page.line_texts,
                }
                for page in self.pages
            ],
            "text": self.text,
        }
