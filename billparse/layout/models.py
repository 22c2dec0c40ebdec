from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class GlyphItem:
    """One positioned text fragment. ``y`` grows upwards from the page bottom."""

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    font_name: str = ""
    font_size: float = 0.0


@dataclass(frozen=True, slots=True)
class PageGlyphs:
    """Rendering engine output for a single page."""

    page_number: int
    width: float
    height: float
    items: list[GlyphItem] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Line:
    """Glyphs sharing one vertical band, ordered by ascending x."""

    items: tuple[GlyphItem, ...]

    @property
    def text(self) -> str:
        return " ".join(item.text for item in self.items)

    @property
    def y(self) -> float:
        if not self.items:
            return 0.0
        return sum(item.y for item in self.items) / len(self.items)


@dataclass(frozen=True, slots=True)
class Page:
    """Reconstructed layout of one source page."""

    page_number: int
    text: str
    lines: tuple[Line, ...]
    items: tuple[GlyphItem, ...]
    width: float
    height: float

    @property
    def line_texts(self) -> list[str]:
        return [line.text for line in self.lines]
