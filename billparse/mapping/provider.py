import time
from collections.abc import Callable
from dataclasses import dataclass

from billparse.extraction.fields import FieldDefinition
from billparse.logging.logger import Log
from billparse.mapping.repository import FieldDefinitionsRepository
from billparse.mapping.resolver import DEFAULT_FIELD_DEFINITIONS


@dataclass(slots=True)
class _CacheEntry:
    definitions: tuple[FieldDefinition, ...]
    expires_at: float


class FieldDefinitionCache:
    """TTL cache of field definitions keyed by user.

    Owned by whoever builds the provider; there is no module-level instance.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, user_id: str) -> tuple[FieldDefinition, ...] | None:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[user_id]
            return None
        return entry.definitions

    def put(self, user_id: str, definitions: tuple[FieldDefinition, ...]) -> None:
        if self._ttl_seconds <= 0:
            return
        self._entries[user_id] = _CacheEntry(definitions, self._clock() + self._ttl_seconds)

    def invalidate(self, user_id: str | None = None) -> None:
        if user_id is None:
            self._entries.clear()
        else:
            self._entries.pop(user_id, None)


class FieldDefinitionProvider:
    """Fetches a user's field definitions, falling back to the defaults."""

    def __init__(
        self,
        repository: FieldDefinitionsRepository,
        cache: FieldDefinitionCache | None = None,
    ) -> None:
        self._repository = repository
        self._cache = cache

    def definitions_for(self, user_id: str | None) -> list[FieldDefinition]:
        """Never raises: absence or a store error yields the default set."""
        if not user_id:
            return list(DEFAULT_FIELD_DEFINITIONS)

        if self._cache is not None:
            cached = self._cache.get(user_id)
            if cached is not None:
                return list(cached)

        try:
            definitions = tuple(self._repository.find_enabled(user_id))
        except Exception as exc:
            Log.warning(f"Field definitions unavailable for user {user_id}: {exc}")
            return list(DEFAULT_FIELD_DEFINITIONS)

        if not definitions:
            Log.info(f"No field definitions for user {user_id}, using defaults")
            definitions = DEFAULT_FIELD_DEFINITIONS
        if self._cache is not None:
            self._cache.put(user_id, definitions)
        return list(definitions)
