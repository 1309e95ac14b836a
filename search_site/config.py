from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # search-site/
PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATES_DIR = PACKAGE_DIR / "templates"


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a working default so the site starts without a .env file.
    Secrets (the admin API key) must be provided via environment variables or .env.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Template registry
    templates_dir: Path = Field(default=DEFAULT_TEMPLATES_DIR, description="Directory holding page templates")
    templates_hot_reload: bool = Field(default=False, description="Watch templates_dir and reload on change")
    templates_reload_interval: float = Field(gt=0, default=1.0, description="Seconds between template scans")

    # Admin endpoints (/debug, /api/templates)
    admin_api_key: str = Field(default="", description="Bearer token for admin endpoints")

    # HTTP security
    cors_origins: str = Field(
        default="http://localhost:8000,http://127.0.0.1:8000",
        description="Comma-separated list of allowed CORS origins",
    )
    trusted_hosts: str = Field(default="*", description="Comma-separated list of trusted Host headers")

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True, description="Enable per-IP rate limiting")
    rate_limit_default: str = Field(default="60/minute", description="Default per-IP rate limit")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("rate_limit_default", mode="after")
    @classmethod
    def validate_rate_limit_default(cls, v: str) -> str:
        """Ensure the rate limit looks like '<count>/<period>'."""
        count, sep, period = v.strip().partition("/")
        if not sep or not count.strip().isdigit() or not period.strip():
            raise ValueError("rate_limit_default must look like '60/minute'")
        return v.strip()


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Avoids re-reading the .env file every time settings are needed.
    Apps created with an explicit Settings instance keep theirs on
    app.state.settings instead (see dependencies.get_app_settings).

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
