"""Groups positioned glyphs into reading-order lines.

Processing flow:
1. Drop whitespace-only glyphs and NFC-normalize their text.
2. Sort top to bottom (y descending), then left to right.
3. Walk the sorted glyphs, growing the current line while each glyph stays
   within tolerance of the line's running average y.
4. On a break, order the finished line by x and start a new one.
5. Flatten: each line's glyph texts joined by one space, newline-terminated.
"""

import dataclasses
import unicodedata

from billparse.layout.models import GlyphItem, Line, Page, PageGlyphs
from billparse.logging.logger import Log


class LayoutReconstructor:
    """Builds ``Page`` objects from raw per-page glyph output."""

    def __init__(self, y_tolerance: float = 5.0) -> None:
        if y_tolerance < 0:
            raise ValueError(f"y_tolerance must be non-negative, got {y_tolerance}")
        self._y_tolerance = y_tolerance

    @property
    def y_tolerance(self) -> float:
        return self._y_tolerance

    def reconstruct(self, page_glyphs: PageGlyphs) -> Page:
        items = self._clean(page_glyphs.items)
        lines = self.group_lines(items)
        text = "".join(f"{line.text}\n" for line in lines)
        Log.debug(
            f"Page {page_glyphs.page_number}: {len(items)} glyphs grouped into {len(lines)} lines"
        )
        return Page(
            page_number=page_glyphs.page_number,
            text=text,
            lines=tuple(lines),
            items=tuple(items),
            width=page_glyphs.width,
            height=page_glyphs.height,
        )

    def group_lines(self, items: list[GlyphItem]) -> list[Line]:
        ordered = sorted(items, key=lambda item: (-item.y, item.x))

        lines: list[Line] = []
        current: list[GlyphItem] = []
        y_sum = 0.0
        for item in ordered:
            if current and abs(item.y - y_sum / len(current)) > self._y_tolerance:
                lines.append(self._close_line(current))
                current = []
                y_sum = 0.0
            current.append(item)
            y_sum += item.y

        if current:
            lines.append(self._close_line(current))
        return lines

    @staticmethod
    def _close_line(items: list[GlyphItem]) -> Line:
        return Line(items=tuple(sorted(items, key=lambda item: item.x)))

    @staticmethod
    def _clean(items: list[GlyphItem]) -> list[GlyphItem]:
        cleaned: list[GlyphItem] = []
        for item in items:
            if not item.text or item.text.isspace():
                continue
            text = unicodedata.normalize("NFC", item.text)
            if text != item.text:
                item = dataclasses.replace(item, text=text)
            cleaned.append(item)
        return cleaned
