"""Settings management for the dva model parser.

This module provides centralized configuration management using pydantic-settings.
All configuration is loaded from environment variables prefixed with
``DVA_PARSER_`` (or a ``.env`` file) with sensible defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level.
        encoding: Character encoding used to read source files.
        error_recovery: Keep extracting from files with syntax errors.
        dedent_code: Dedent the regenerated source of reducers and effects.
        max_concurrency: Maximum number of files parsed at the same time.
        max_file_size_kb: Files larger than this are skipped by discovery.
        include_patterns: Glob patterns of files considered by discovery.
        exclude_patterns: Glob patterns of files never parsed.
    """

    model_config = SettingsConfigDict(
        env_prefix="DVA_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", description="Logging level")
    encoding: str = Field(default="utf-8", description="Source file encoding")

    # Parsing settings
    error_recovery: bool = Field(
        default=False,
        description="Skip broken entries instead of failing on syntax errors",
    )
    dedent_code: bool = Field(
        default=True,
        description="Dedent regenerated reducer and effect source",
    )
    max_concurrency: int = Field(
        default=16,
        ge=1,
        description="Maximum number of files parsed concurrently",
    )

    # Discovery settings
    max_file_size_kb: int = Field(
        default=512,
        ge=1,
        description="Maximum source file size in KB",
    )
    include_patterns: list[str] = Field(
        default_factory=lambda: ["**/*.js", "**/*.jsx", "**/*.ts", "**/*.tsx"],
        description="Glob patterns of files to scan",
    )
    exclude_patterns: list[str] = Field(
        default_factory=lambda: [
            "**/node_modules/**",
            "**/dist/**",
            "**/build/**",
            "**/.umi/**",
            "**/*.d.ts",
        ],
        description="Glob patterns of files to skip",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are loaded once and reused.

    Returns:
        The application settings instance.
    """
    return Settings()
