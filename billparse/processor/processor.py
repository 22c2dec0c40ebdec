from collections.abc import Iterable

from billparse.config.settings import Settings
from billparse.extraction.fallback import PositionalFallbackExtractor, ZoneLayout
from billparse.extraction.fields import FieldDefinition, Language
from billparse.extraction.matcher import PatternCascadeMatcher
from billparse.ingest.byte_normalizer import ByteNormalizer
from billparse.ingest.models import DocumentKind
from billparse.layout.reconstructor import LayoutReconstructor
from billparse.logging.logger import Log
from billparse.mapping.provider import FieldDefinitionProvider
from billparse.mapping.resolver import FieldMappingResolver
from billparse.normalization.normalizer import ValueNormalizer
from billparse.pdf.base import BasePdfRenderer
from billparse.pdf.factory import PdfRendererFactory
from billparse.processor.exceptions import ExtractionError, InvalidInputKind
from billparse.processor.models import ExtractionResult
from billparse.processor.pipeline import PipelineContext, PipelineStep
from billparse.processor.steps import (
    DetectLanguageStep,
    LoadEmailTextStep,
    MatchPatternsStep,
    NormalizeBytesStep,
    NormalizeValuesStep,
    PositionalFallbackStep,
    ReconstructLayoutStep,
    ResolveFieldMappingStep,
    ScoreConfidenceStep,
)
from billparse.scoring.confidence import ConfidenceScorer


class Processor:
    """Runs one document through the extraction pipeline.

    PDF: normalize bytes -> reconstruct layout -> detect language -> match
    patterns -> positional fallback -> resolve mapping -> normalize values
    -> score. Email text skips the first two stages and the fallback.
    """

    def __init__(
        self,
        byte_normalizer: ByteNormalizer,
        renderer: BasePdfRenderer,
        reconstructor: LayoutReconstructor,
        matcher: PatternCascadeMatcher,
        fallback: PositionalFallbackExtractor,
        resolver: FieldMappingResolver,
        normalizer: ValueNormalizer,
        scorer: ConfidenceScorer,
        definition_provider: FieldDefinitionProvider | None = None,
        default_language: Language = Language.EN,
    ) -> None:
        self._definition_provider = definition_provider
        analysis_steps: list[PipelineStep] = [
            DetectLanguageStep(default_language),
            MatchPatternsStep(matcher),
            PositionalFallbackStep(fallback),
            ResolveFieldMappingStep(resolver),
            NormalizeValuesStep(normalizer),
            ScoreConfidenceStep(scorer),
        ]
        self._pdf_steps: list[PipelineStep] = [
            NormalizeBytesStep(byte_normalizer),
            ReconstructLayoutStep(renderer, reconstructor),
            *analysis_steps,
        ]
        self._email_steps: list[PipelineStep] = [LoadEmailTextStep(), *analysis_steps]

    def extract_pdf(
        self,
        payload: object,
        language: Language | str | None = None,
        definitions: Iterable[FieldDefinition] | None = None,
        user_id: str | None = None,
    ) -> ExtractionResult:
        return self._run(self._pdf_steps, payload, DocumentKind.PDF, language, definitions, user_id)

    def extract_email(
        self,
        text: str | bytes,
        language: Language | str | None = None,
        definitions: Iterable[FieldDefinition] | None = None,
        user_id: str | None = None,
    ) -> ExtractionResult:
        return self._run(self._email_steps, text, DocumentKind.TEXT, language, definitions, user_id)

    def _run(
        self,
        steps: list[PipelineStep],
        payload: object,
        kind: DocumentKind,
        language: Language | str | None,
        definitions: Iterable[FieldDefinition] | None,
        user_id: str | None,
    ) -> ExtractionResult:
        try:
            context = PipelineContext(
                payload=payload,
                kind=kind,
                language=Language.parse(language) if language is not None else None,
                definitions=self._definitions(definitions, user_id),
            )
        except ValueError as exc:
            error = InvalidInputKind(str(exc))
            Log.error(f"Extraction rejected: {error}")
            return ExtractionResult.failure(str(error), error.kind)

        try:
            for step in steps:
                context = step.run(context)
        except ExtractionError as exc:
            Log.error(f"Extraction failed ({exc.kind}): {exc}")
            return ExtractionResult.failure(
                str(exc),
                exc.kind,
                language=context.language.value if context.language else None,
            )

        fields = FieldMappingResolver.as_field_map(context.resolved)
        return ExtractionResult(
            success=True,
            text=context.text,
            pages=context.pages,
            fields=fields,
            confidence=context.confidence,
            language=context.language.value if context.language else None,
            skipped_pages=context.skipped_pages,
        )

    def _definitions(
        self,
        definitions: Iterable[FieldDefinition] | None,
        user_id: str | None,
    ) -> list[FieldDefinition] | None:
        if definitions is not None:
            return list(definitions)
        if user_id and self._definition_provider is not None:
            return self._definition_provider.definitions_for(user_id)
        return None


def build_processor(
    settings: Settings,
    definition_provider: FieldDefinitionProvider | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    return Processor(
        byte_normalizer=ByteNormalizer(),
        renderer=PdfRendererFactory.create(settings),
        reconstructor=LayoutReconstructor(y_tolerance=settings.layout_y_tolerance),
        matcher=PatternCascadeMatcher(),
        fallback=PositionalFallbackExtractor(
            ZoneLayout(settings.zone_top_fraction, settings.zone_bottom_fraction)
        ),
        resolver=FieldMappingResolver(),
        normalizer=ValueNormalizer(),
        scorer=ConfidenceScorer(max_amount=settings.max_amount),
        definition_provider=definition_provider,
        default_language=Language.parse(settings.default_language),
    )
