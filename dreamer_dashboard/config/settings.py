"""Dashboard settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings fills each field from (highest priority first):
#
#   1. **Keyword arguments**: ``Settings(api_url=...)``, which is how the
#      CLI's ``--api-url`` flag overrides everything else
#   2. **Environment variables** prefixed ``DREAMER_``, e.g.
#      DREAMER_API_URL=http://ingest.internal:8000
#   3. **.env file** in the working directory (same names as the env vars)
#   4. The defaults below
#
# ``APP_ENV`` and ``LOG_LEVEL`` are also accepted WITHOUT the prefix, so a
# deployment that already exports them for other services needs no extra
# variables.  ``use_json_logs`` turns ``app_env`` into the renderer choice
# handed to ``configure_logging``.
#
# Pydantic only checks types.  ``validate_runtime()`` checks the values the
# engine cannot run with (empty or unparseable URL, non-positive timings)
# and is called by ``Dashboard.__init__`` before anything is built.
# ──────────────────────────────────────────────────────────────────────
"""

import httpx
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dreamer_dashboard.utils.errors import ConfigurationError


class Settings(BaseSettings):
    """Dashboard engine settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    # populate_by_name lets tests and the CLI pass app_env/log_level by
    # field name even though they carry a validation_alias.
    model_config = SettingsConfigDict(
        env_prefix="DREAMER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === Backend ===
    api_url: str = "http://localhost:8000"  # Root of the ingestion backend, no trailing path needed
    request_timeout_seconds: float = 30.0  # Applies to every read and to POST /ingest

    # === Sync ===
    sync_interval_seconds: float = 10.0  # Gap between scheduled ticks
    recent_limit: int = 10  # Documents requested per tick

    # === Notifications ===
    toast_duration_seconds: float = 4.0  # A replacing toast restarts this window

    # === App Config ===
    app_env: str = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "DREAMER_APP_ENV"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "DREAMER_LOG_LEVEL"),
    )

    @property
    def use_json_logs(self) -> bool:
        """Production emits JSON lines; everything else gets console output."""
        return self.app_env.strip().lower() == "production"

    def validate_runtime(self) -> None:
        """Raise :class:`ConfigurationError` for values the engine cannot run with."""
        if not self.api_url:
            raise ConfigurationError("DREAMER_API_URL must not be empty")
        try:
            url = httpx.URL(self.api_url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"DREAMER_API_URL is not a valid URL: {exc}") from exc
        # httpx parses "localhost:8000" as scheme "localhost"; require a real one.
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(
                f"DREAMER_API_URL must be an absolute http(s) URL, got {self.api_url!r}"
            )
        if self.sync_interval_seconds <= 0:
            raise ConfigurationError("DREAMER_SYNC_INTERVAL_SECONDS must be positive")
        if self.recent_limit <= 0:
            raise ConfigurationError("DREAMER_RECENT_LIMIT must be positive")
        if self.toast_duration_seconds <= 0:
            raise ConfigurationError("DREAMER_TOAST_DURATION_SECONDS must be positive")
        if self.request_timeout_seconds <= 0:
            raise ConfigurationError("DREAMER_REQUEST_TIMEOUT_SECONDS must be positive")
