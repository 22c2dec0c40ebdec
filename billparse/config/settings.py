from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "billparse"
    db_username: str = "billparse"
    db_password: str = "secret"

    pdf_engine: str = "pdfplumber"
    default_language: str = "en"

    layout_y_tolerance: float = Field(default=5.0, gt=0)
    zone_top_fraction: float = Field(default=1 / 3, gt=0, lt=1)
    zone_bottom_fraction: float = Field(default=1 / 3, gt=0, lt=1)

    field_mapping_cache_ttl_seconds: int = Field(default=60, ge=0)
    max_amount: float = Field(default=1_000_000_000, gt=0)
