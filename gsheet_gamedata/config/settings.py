"""
Centralized configuration for gsheet-gamedata

Pydantic Settings models bound to environment variables (prefix ``GSHEET_``)
and an optional ``.env`` file.

Features:
- Type-safe configuration with validation
- Separate sections for the Google Sheets transport and output layout
- Test-friendly reload
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def _env_file() -> Optional[str]:
    return ".env" if not os.getenv("GSHEET_DISABLE_DOTENV") else None


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets export transport settings"""

    model_config = SettingsConfigDict(
        env_prefix="GSHEET_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent to docs.google.com (default agents get blocked)"
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds"
    )
    max_redirects: int = Field(
        default=5,
        ge=0,
        description="Redirect budget, HTML-embedded redirects included"
    )
    csv_delimiter: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Field delimiter of the exported table"
    )


class OutputSettings(BaseSettings):
    """Where generated artifacts and the sources list live, relative to the project root"""

    model_config = SettingsConfigDict(
        env_prefix="GSHEET_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    project_root: Path = Field(
        default=Path("."),
        description="Game project root directory"
    )
    sources_file: str = Field(
        default="extensions/gsheet/data/sheets.json",
        description="Configured sheet sources (JSON array of {name, url})"
    )
    json_dir: str = Field(
        default="assets/resources/json",
        description="Directory for generated {Sheet}.json files"
    )
    class_dir: str = Field(
        default="assets/Scripts/GameData",
        description="Directory for generated {Sheet}.ts classes"
    )
    registry_path: str = Field(
        default="assets/Scripts/GameDataManager.ts",
        description="Generated registry module path"
    )
    resource_prefix: str = Field(
        default="json",
        description="resources.load() prefix for the JSON assets"
    )

    @field_validator("json_dir", "class_dir", "registry_path", "sources_file", "resource_prefix")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip().strip("/")

    @property
    def sources_path(self) -> Path:
        return self.project_root / self.sources_file


class ApplicationSettings(BaseSettings):
    """Main settings - aggregates the other sections"""

    model_config = SettingsConfigDict(
        env_prefix="GSHEET_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines"
    )

    google_sheets: GoogleSheetsSettings = Field(default_factory=GoogleSheetsSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()


settings = ApplicationSettings()


def get_settings() -> ApplicationSettings:
    """
    Get the global settings instance

    Returns:
        ApplicationSettings: The global settings instance
    """
    return settings


def reload_settings() -> ApplicationSettings:
    """
    Reload settings from environment (useful for testing)

    Returns:
        ApplicationSettings: New settings instance with reloaded values
    """
    global settings
    settings = ApplicationSettings()
    return settings
