from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from billparse.extraction.fields import FieldDefinition, FieldId, Language
from billparse.ingest.models import DocumentKind, RawDocument
from billparse.layout.models import Page
from billparse.mapping.models import ResolvedField
from billparse.scoring.confidence import Confidence


@dataclass(slots=True)
class PipelineContext:
    payload: object
    kind: DocumentKind = DocumentKind.PDF
    language: Language | None = None
    definitions: list[FieldDefinition] | None = None
    document: RawDocument | None = None
    pages: list[Page] = field(default_factory=list)
    skipped_pages: list[int] = field(default_factory=list)
    text: str = ""
    raw_values: dict[FieldId, str] = field(default_factory=dict)
    resolved: list[ResolvedField] = field(default_factory=list)
    confidence: Confidence | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
