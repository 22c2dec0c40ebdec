import pytest
from pydantic import ValidationError

from billparse.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_layout_tolerance(self) -> None:
        s = Settings()
        assert s.layout_y_tolerance == 5.0

    def test_default_zones_are_thirds(self) -> None:
        s = Settings()
        assert s.zone_top_fraction == pytest.approx(1 / 3)
        assert s.zone_bottom_fraction == pytest.approx(1 / 3)

    def test_default_field_mapping_cache_ttl(self) -> None:
        s = Settings()
        assert s.field_mapping_cache_ttl_seconds == 60


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_pdf_engine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_ENGINE", "pymupdf")
        s = Settings()
        assert s.pdf_engine == "pymupdf"

    def test_loads_zone_fractions(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZONE_TOP_FRACTION", "0.25")
        monkeypatch.setenv("ZONE_BOTTOM_FRACTION", "0.2")
        s = Settings()
        assert s.zone_top_fraction == 0.25
        assert s.zone_bottom_fraction == 0.2

    def test_loads_default_language(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_LANGUAGE", "hu")
        s = Settings()
        assert s.default_language == "hu"


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_non_positive_tolerance_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYOUT_Y_TOLERANCE", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_zone_fraction_out_of_range_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZONE_TOP_FRACTION", "1.5")
        with pytest.raises(ValidationError):
            Settings()
