"""Engine configuration.

Values are read from the environment (prefix ``JOBCV_``) and validated once,
so a misconfiguration fails at startup rather than mid-request. Core
components take their parameters through constructors; only the CLI and the
defaults of the page fetcher and the assembler read settings directly.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settings overridable via ``JOBCV_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="JOBCV_", extra="ignore")

    # === Page fetching ===
    http_timeout_s: float = Field(default=20.0, gt=0, description="HTTP timeout in seconds.")
    http_max_retries: int = Field(default=3, ge=0, le=10, description="Retries on HTTP 429.")
    http_backoff_s: float = Field(default=2.0, ge=0, description="Base delay for exponential backoff.")

    # === Submission ===
    source_tag: str = Field(default="jobsdb-extension", min_length=1)
    submission_version: str = Field(default="1.0.0", min_length=1)
    max_cv_bytes: int = Field(default=10 * 1024 * 1024, ge=1, description="Largest accepted CV file.")

    # === Logging ===
    log_level: str = Field(default="INFO", description="Root log level used by the CLI.")


@lru_cache()
def get_settings() -> EngineSettings:
    """Return the process-wide settings, loaded on first use."""
    return EngineSettings()
