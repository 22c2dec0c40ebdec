from collections.abc import Callable, Iterable

from billparse.extraction.fields import FieldId, Language
from billparse.extraction.patterns import rules_for
from billparse.logging.logger import Log

Stage = Callable[[], str | None]


def first_success(stages: Iterable[Stage]) -> str | None:
    """Run *stages* in order and return the first non-empty value."""
    for stage in stages:
        value = stage()
        if value:
            return value
    return None


class PatternCascadeMatcher:
    """Tries a field's ordered recognizer rules against the full text."""

    def match(self, text: str, field_id: FieldId, language: Language) -> str | None:
        """Return the first non-empty captured value, or None.

        Only *language*'s rules are consulted; a miss never falls through
        to another language.
        """
        if not text:
            return None
        for index, pattern in enumerate(rules_for(language, field_id)):
            found = pattern.search(text)
            if found is None:
                continue
            value = next((g.strip() for g in found.groups() if g and g.strip()), None)
            if value:
                Log.debug(f"{language}/{field_id}: rule {index} matched '{value}'")
                return value
        return None

    def match_all(
        self,
        text: str,
        field_ids: Iterable[FieldId],
        language: Language,
    ) -> dict[FieldId, str]:
        found: dict[FieldId, str] = {}
        for field_id in field_ids:
            value = self.match(text, field_id, language)
            if value is not None:
                found[field_id] = value
        return found
