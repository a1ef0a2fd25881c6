"""
semverlint Configuration — pydantic-settings based.

All settings are read from SEMVERLINT_* environment variables or a .env file.
Nothing is required; every value has a working default.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Catalog ──
    lints_dir: str | None = Field(
        default=None,
        description="Directory holding lint definitions. None uses the bundled catalog.",
    )

    # ── Overrides ──
    override_files: list[str] = Field(
        default_factory=list,
        description="YAML override layers, lowest precedence first",
    )

    # ── Evaluation ──
    max_workers: int = Field(
        default=4, ge=1, description="Lints evaluated concurrently per check run"
    )
    run_timeout_seconds: float | None = Field(
        default=None,
        description=(
            "Whole-run deadline. Lints still running after it are reported as timed "
            "out. Their worker threads are not killed: the process exits only once "
            "they return."
        ),
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Root log level")

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")

    model_config = SettingsConfigDict(
        env_prefix="SEMVERLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Singleton instance, imported by other modules
settings = Settings()
