from billparse.extraction.fallback import PositionalFallbackExtractor
from billparse.extraction.fields import FieldId, Language
from billparse.extraction.language import detect_language
from billparse.extraction.matcher import PatternCascadeMatcher
from billparse.ingest.byte_normalizer import ByteNormalizer
from billparse.ingest.models import DocumentKind, RawDocument
from billparse.layout.reconstructor import LayoutReconstructor
from billparse.logging.logger import Log
from billparse.mapping.resolver import FieldMappingResolver
from billparse.normalization.normalizer import ValueNormalizer
from billparse.pdf.base import BasePdfRenderer
from billparse.pdf.exceptions import PdfRenderError
from billparse.processor.exceptions import EmptyDocument, MalformedPayload, PageExtractionFailure
from billparse.processor.pipeline import PipelineContext, PipelineStep
from billparse.scoring.confidence import ConfidenceScorer

EXTRACTABLE_FIELDS: tuple[FieldId, ...] = tuple(f for f in FieldId if f is not FieldId.CATEGORY)


class NormalizeBytesStep(PipelineStep):
    def __init__(self, byte_normalizer: ByteNormalizer) -> None:
        self._byte_normalizer = byte_normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document = self._byte_normalizer.to_raw_document(context.payload, context.kind)
        Log.info(f"Normalized payload: {context.document.size} bytes ({context.kind})")
        return context


class LoadEmailTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        payload = context.payload
        if isinstance(payload, (bytes, bytearray)):
            try:
                payload = bytes(payload).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedPayload(f"Email body is not valid UTF-8: {exc}") from exc
        if not isinstance(payload, str):
            raise MalformedPayload(f"Email body must be text, got {type(payload).__name__}")
        if not payload.strip():
            raise EmptyDocument("Email body has no text")
        context.document = RawDocument(payload=payload.encode("utf-8"), kind=DocumentKind.TEXT)
        context.text = payload
        Log.info(f"Loaded email body: {len(payload)} chars")
        return context


class ReconstructLayoutStep(PipelineStep):
    def __init__(self, renderer: BasePdfRenderer, reconstructor: LayoutReconstructor) -> None:
        self._renderer = renderer
        self._reconstructor = reconstructor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before layout reconstruction")
        try:
            rendered = self._renderer.open(context.document.payload)
        except PdfRenderError as exc:
            raise MalformedPayload(str(exc)) from exc

        with rendered:
            if rendered.page_count == 0:
                raise EmptyDocument("Document has no pages")
            for page_number in range(1, rendered.page_count + 1):
                try:
                    page = self._reconstructor.reconstruct(rendered.page(page_number))
                except Exception as exc:
                    failure = PageExtractionFailure(page_number, str(exc))
                    Log.warning(f"{failure}; skipping page")
                    context.skipped_pages.append(page_number)
                    continue
                context.pages.append(page)

        context.text = "\n".join(page.text for page in context.pages if page.text)
        if not context.text.strip():
            raise EmptyDocument("Document has no extractable text")
        Log.info(
            f"Reconstructed {len(context.pages)} pages "
            f"({sum(len(p.lines) for p in context.pages)} lines, "
            f"{len(context.skipped_pages)} skipped)"
        )
        return context


class DetectLanguageStep(PipelineStep):
    def __init__(self, default_language: Language) -> None:
        self._default_language = default_language

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.language is None:
            context.language = detect_language(context.text, default=self._default_language)
            Log.info(f"Detected document language: {context.language}")
        return context


class MatchPatternsStep(PipelineStep):
    def __init__(self, matcher: PatternCascadeMatcher) -> None:
        self._matcher = matcher

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.language is None:
            raise ValueError("PipelineContext.language must be set before pattern matching")
        context.raw_values = self._matcher.match_all(
            context.text, EXTRACTABLE_FIELDS, context.language
        )
        Log.info(f"Pattern cascade matched {len(context.raw_values)} fields")
        return context


class PositionalFallbackStep(PipelineStep):
    def __init__(self, fallback: PositionalFallbackExtractor) -> None:
        self._fallback = fallback

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.pages or context.language is None:
            return context
        missing = [f for f in EXTRACTABLE_FIELDS if f not in context.raw_values]
        if not missing:
            return context
        recovered = self._fallback.extract_missing(context.pages, missing, context.language)
        context.raw_values.update(recovered)
        Log.info(f"Positional fallback recovered {len(recovered)} of {len(missing)} missing fields")
        return context


class ResolveFieldMappingStep(PipelineStep):
    def __init__(self, resolver: FieldMappingResolver) -> None:
        self._resolver = resolver

    def run(self, context: PipelineContext) -> PipelineContext:
        context.resolved = self._resolver.resolve(context.raw_values, context.definitions)
        return context


class NormalizeValuesStep(PipelineStep):
    def __init__(self, normalizer: ValueNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.language is None:
            raise ValueError("PipelineContext.language must be set before value normalization")
        context.resolved = self._normalizer.normalize(
            context.resolved, context.text, context.language
        )
        return context


class ScoreConfidenceStep(PipelineStep):
    def __init__(self, scorer: ConfidenceScorer) -> None:
        self._scorer = scorer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.confidence = self._scorer.score(context.resolved)
        Log.info(
            f"Scored {context.confidence.scored_fields} fields, "
            f"overall confidence {context.confidence.overall:.2f}"
        )
        return context
