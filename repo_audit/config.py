"""
Configuration management for gh-repo-audit.

Uses Pydantic for robust validation, type safety, and environment variable support.
Configuration values are validated at load time to fail fast on invalid configs.

SECURITY NOTES:
- Credentials are not part of this configuration; they are resolved
  separately by ``repo_audit.auth`` from arguments and GITHUB_* variables
- The API URL must use HTTPS (or localhost for testing)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_audit.constants import (
    DEFAULT_API_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_OUTPUT_BASENAME,
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_INPUT_FILE_SIZE_BYTES,
)
from repo_audit.exceptions import ValidationError
from repo_audit.github.client import graphql_url_for
from repo_audit.utils.version import parse_version

ReportFormat = Literal["csv", "json", "markdown"]

_FORMAT_EXTENSIONS: dict[str, str] = {
    "csv": ".csv",
    "json": ".json",
    "markdown": ".md",
}


class GitHubConfig(BaseModel):
    """Connection settings for the GitHub API."""

    api_url: str = DEFAULT_API_URL
    # GHES version; None means auto-detect (and github.com needs none)
    server_version: str | None = None
    timeout_seconds: int = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=5, le=300)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1, le=100)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0, le=10)
    verify_ssl: bool = True  # Never disable in production

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith(("https://", "http://localhost")):
            raise ValueError("API URL must use HTTPS (or localhost for testing)")
        return v.rstrip("/")

    @field_validator("server_version")
    @classmethod
    def validate_server_version(cls, v: str | None) -> str | None:
        """Reject versions the feature gates could not compare."""
        if v is None or not v.strip():
            return None
        try:
            parse_version(v)
        except ValidationError as e:
            raise ValueError(e.message) from e
        return v.strip()

    @model_validator(mode="after")
    def warn_no_ssl(self) -> "GitHubConfig":
        """Warn if SSL verification is disabled."""
        if not self.verify_ssl:
            import warnings
            warnings.warn(
                "SSL verification is disabled. This is insecure and should "
                "only be used for testing with self-signed certificates.",
                UserWarning,
                stacklevel=2
            )
        return self

    @property
    def is_github_com(self) -> bool:
        return self.api_url == DEFAULT_API_URL

    @property
    def graphql_url(self) -> str:
        return graphql_url_for(self.api_url)


class ReportConfig(BaseModel):
    """Configuration for report generation."""

    format: ReportFormat = "csv"
    output_path: Path | None = None

    def resolved_output_path(self) -> Path:
        """Output path, defaulting to ``gh-repo-audit.<ext>`` in the working directory."""
        if self.output_path is not None:
            return self.output_path
        return Path(f"{DEFAULT_OUTPUT_BASENAME}{_FORMAT_EXTENSIONS[self.format]}")


class AuditConfig(BaseSettings):
    """
    Main configuration for gh-repo-audit.

    Configuration precedence (highest to lowest):
    1. CLI options (applied as overrides)
    2. Environment variables (GH_REPO_AUDIT_*)
    3. Config file values
    4. Default values

    Example environment variables:
        GH_REPO_AUDIT_LOG_LEVEL=DEBUG
        GH_REPO_AUDIT_GITHUB__API_URL=https://ghe.example.com/api/v3
    """

    model_config = SettingsConfigDict(
        env_prefix="GH_REPO_AUDIT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # General settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    verbose: bool = False
    no_color: bool = False
    json_logs: bool = False

    # Sub-configurations
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "AuditConfig":
        """
        Load configuration from a YAML file.

        SECURITY: Uses safe_load to prevent code execution.
        """
        import yaml

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        if path.stat().st_size > MAX_INPUT_FILE_SIZE_BYTES:
            raise ValueError(f"Config file too large: {path}")

        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a YAML mapping")

        return cls(**data)

    def to_safe_dict(self) -> dict[str, Any]:
        """Export config as a JSON-friendly dict for logging or debugging."""
        return self.model_dump(mode="json")


def get_default_config() -> AuditConfig:
    """Get default configuration with environment overrides."""
    return AuditConfig()


def load_config(
    config_path: Path | None = None,
    **overrides: Any,
) -> AuditConfig:
    """
    Load configuration from file and/or environment with overrides.

    Args:
        config_path: Optional path to YAML config file
        **overrides: Direct overrides for config values; nested sections
            are merged, and None values are ignored

    Returns:
        Validated AuditConfig instance
    """
    if config_path:
        config = AuditConfig.from_yaml_file(config_path)
    else:
        config = get_default_config()

    overrides = _drop_none(overrides)
    if overrides:
        config_dict = config.model_dump()
        _deep_update(config_dict, overrides)
        config = AuditConfig(**config_dict)

    return config


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    result = {}
    for key, value in values.items():
        if isinstance(value, dict):
            value = _drop_none(value)
            if not value:
                continue
        if value is not None:
            result[key] = value
    return result


def _deep_update(base: dict[str, Any], updates: dict[str, Any]) -> None:
    """Recursively update a dictionary."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
