"""Accent folding with a position map back into the original text.

Keyword search happens on the folded form (``határidő`` -> ``hatarido``) so
labels printed without accents still match; slices are then taken from the
original text through the map.
"""

from typing import ClassVar

import icu  # type: ignore[import-untyped]


class TextFolder:
    """Latin-ASCII, lowercase transliteration via ICU."""

    _ICU_TRANSFORM: ClassVar[str] = "Latin-ASCII; Lower"

    def __init__(self) -> None:
        self._transliterator: icu.Transliterator = icu.Transliterator.createInstance(
            self._ICU_TRANSFORM
        )
        self._char_cache: dict[str, str] = {}

    def fold(self, text: str) -> str:
        return self.fold_with_mapping(text)[0]

    def fold_with_mapping(self, text: str) -> tuple[str, list[int]]:
        """Transliterate *text* character by character.

        Returns:
            (folded_text, folded_to_orig) where folded_to_orig[j] is the
            index in *text* that produced folded char j.
        """
        parts: list[str] = []
        folded_to_orig: list[int] = []
        for orig_idx, ch in enumerate(text):
            folded = self._char_cache.get(ch)
            if folded is None:
                folded = self._transliterator.transliterate(ch)
                self._char_cache[ch] = folded
            parts.append(folded)
            folded_to_orig.extend([orig_idx] * len(folded))
        return "".join(parts), folded_to_orig

    @staticmethod
    def to_original(folded_to_orig: list[int], folded_index: int, original_length: int) -> int:
        """Map a folded offset (exclusive end allowed) onto the original text."""
        if folded_index >= len(folded_to_orig):
            return original_length
        return folded_to_orig[folded_index]
