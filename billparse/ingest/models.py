from dataclasses import dataclass
from enum import StrEnum


class DocumentKind(StrEnum):
    PDF = "application/pdf"
    TEXT = "text/plain"


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Canonical payload for one extraction request."""

    payload: bytes
    kind: DocumentKind

    @property
    def size(self) -> int:
        return len(self.payload)
