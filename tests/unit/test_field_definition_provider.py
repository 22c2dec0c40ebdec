from unittest.mock import MagicMock

from billparse.extraction.fields import FieldDefinition, FieldId, FieldType
from billparse.mapping.provider import FieldDefinitionCache, FieldDefinitionProvider
from billparse.mapping.resolver import DEFAULT_FIELD_DEFINITIONS

USER_DEFINITIONS = [FieldDefinition(FieldId.AMOUNT, "price", FieldType.CURRENCY, True, 1)]


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestFieldDefinitionCache:
    def test_hit_before_expiry(self) -> None:
        clock = _Clock()
        cache = FieldDefinitionCache(ttl_seconds=60, clock=clock)
        cache.put("u1", tuple(USER_DEFINITIONS))
        clock.now = 59
        assert cache.get("u1") == tuple(USER_DEFINITIONS)

    def test_miss_after_expiry(self) -> None:
        clock = _Clock()
        cache = FieldDefinitionCache(ttl_seconds=60, clock=clock)
        cache.put("u1", tuple(USER_DEFINITIONS))
        clock.now = 60
        assert cache.get("u1") is None

    def test_zero_ttl_disables_cache(self) -> None:
        cache = FieldDefinitionCache(ttl_seconds=0)
        cache.put("u1", tuple(USER_DEFINITIONS))
        assert cache.get("u1") is None

    def test_invalidate_one_and_all(self) -> None:
        cache = FieldDefinitionCache()
        cache.put("u1", tuple(USER_DEFINITIONS))
        cache.put("u2", tuple(USER_DEFINITIONS))
        cache.invalidate("u1")
        assert cache.get("u1") is None
        assert cache.get("u2") is not None
        cache.invalidate()
        assert cache.get("u2") is None


class TestFieldDefinitionProvider:
    def test_no_user_returns_defaults(self) -> None:
        repo = MagicMock()
        provider = FieldDefinitionProvider(repo)
        assert provider.definitions_for(None) == list(DEFAULT_FIELD_DEFINITIONS)
        repo.find_enabled.assert_not_called()

    def test_returns_user_definitions(self) -> None:
        repo = MagicMock()
        repo.find_enabled.return_value = USER_DEFINITIONS
        assert FieldDefinitionProvider(repo).definitions_for("u1") == USER_DEFINITIONS

    def test_empty_result_falls_back_to_defaults(self) -> None:
        repo = MagicMock()
        repo.find_enabled.return_value = []
        assert FieldDefinitionProvider(repo).definitions_for("u1") == list(DEFAULT_FIELD_DEFINITIONS)

    def test_store_error_falls_back_to_defaults(self) -> None:
        repo = MagicMock()
        repo.find_enabled.side_effect = RuntimeError("connection refused")
        assert FieldDefinitionProvider(repo).definitions_for("u1") == list(DEFAULT_FIELD_DEFINITIONS)

    def test_store_error_is_not_cached(self) -> None:
        repo = MagicMock()
        repo.find_enabled.side_effect = [RuntimeError("down"), USER_DEFINITIONS]
        provider = FieldDefinitionProvider(repo, FieldDefinitionCache())
        provider.definitions_for("u1")
        assert provider.definitions_for("u1") == USER_DEFINITIONS

    def test_cache_avoids_second_lookup(self) -> None:
        repo = MagicMock()
        repo.find_enabled.return_value = USER_DEFINITIONS
        provider = FieldDefinitionProvider(repo, FieldDefinitionCache())
        provider.definitions_for("u1")
        provider.definitions_for("u1")
        repo.find_enabled.assert_called_once_with("u1")
