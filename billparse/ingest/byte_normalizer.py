"""Canonicalizes caller payloads into a single immutable ``bytes`` buffer.

Accepted shapes:
- ``bytes`` / ``bytearray`` / ``memoryview`` (copied, never mutated)
- a sequence of ints in 0..255 (a byte array serialized as a list)
- ``str`` holding base64, optionally prefixed with ``data:<mime>;base64,``
"""

import base64
import binascii
import re
from collections.abc import Sequence
from typing import ClassVar

from billparse.ingest.models import DocumentKind, RawDocument
from billparse.logging.logger import Log
from billparse.processor.exceptions import EmptyDocument, InvalidInputKind, MalformedPayload

Payload = bytes | bytearray | memoryview | Sequence[int] | str


class ByteNormalizer:
    """Turns any accepted payload shape into canonical bytes."""

    PDF_MAGIC: ClassVar[bytes] = b"%PDF-"
    # PDF readers accept junk before the header within the first kilobyte
    HEADER_SEARCH_WINDOW: ClassVar[int] = 1024

    _DATA_URL_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"^\s*data:(?P<mime>[\w.+\-/]*)?(?:;[\w\-]+=[\w\-]+)*;base64,",
        re.IGNORECASE,
    )
    _WHITESPACE_RE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")
    _BASE64_ALPHABET_RE: ClassVar[re.Pattern[str]] = re.compile(r"[A-Za-z0-9+/=_\-]*")

    def normalize(
        self,
        payload: Payload,
        expected_kind: DocumentKind = DocumentKind.PDF,
    ) -> bytes:
        """Return a fresh ``bytes`` copy of *payload*.

        Raises:
            InvalidInputKind: if the payload type is not supported.
            MalformedPayload: if decoding fails or the PDF header is missing.
            EmptyDocument: if the decoded payload is empty.
        """
        data = self._to_bytes(payload)
        if not data:
            raise EmptyDocument("Document payload is empty")
        if expected_kind is DocumentKind.PDF:
            self._check_pdf_header(data)
        Log.debug(f"Normalized {type(payload).__name__} payload into {len(data)} bytes")
        return data

    def to_raw_document(
        self,
        payload: Payload,
        kind: DocumentKind = DocumentKind.PDF,
    ) -> RawDocument:
        return RawDocument(payload=self.normalize(payload, kind), kind=kind)

    def _to_bytes(self, payload: object) -> bytes:
        match payload:
            case bytes() | bytearray():
                return bytes(payload)
            case memoryview():
                return payload.tobytes()
            case str():
                return self._decode_base64(payload)
            case Sequence():
                return self._from_int_sequence(payload)
        raise InvalidInputKind(
            f"Unsupported payload type '{type(payload).__name__}'. "
            "Expected bytes, bytearray, memoryview, a list of ints or a base64 string"
        )

    def _decode_base64(self, text: str) -> bytes:
        body = self._DATA_URL_RE.sub("", text, count=1)
        body = self._WHITESPACE_RE.sub("", body)
        if not body:
            return b""
        if not self._BASE64_ALPHABET_RE.fullmatch(body):
            raise MalformedPayload("Base64 payload contains characters outside the alphabet")
        body = body.rstrip("=")
        body += "=" * (-len(body) % 4)
        altchars = b"-_" if ("-" in body or "_" in body) else None
        try:
            return base64.b64decode(body, altchars=altchars, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedPayload(f"Base64 decoding failed: {exc}") from exc

    def _from_int_sequence(self, values: Sequence[object]) -> bytes:
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            raise InvalidInputKind("Byte array payload must contain only integers")
        try:
            return bytes(values)  # type: ignore[arg-type]
        except ValueError as exc:
            raise MalformedPayload(f"Byte array payload is out of range: {exc}") from exc

    def _check_pdf_header(self, data: bytes) -> None:
        if data.find(self.PDF_MAGIC, 0, self.HEADER_SEARCH_WINDOW) == -1:
            raise MalformedPayload(
                f"Payload does not start with the PDF header {self.PDF_MAGIC!r}"
            )
