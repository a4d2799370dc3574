"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use OVUS_ prefix (e.g., OVUS_STRICT_MODE=true).
List settings are given as JSON (e.g., OVUS_HTML_EXTENSIONS='[".html", ".htm"]').

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import Iterable, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def extensions_normalize(extensions: Iterable[str]) -> List[str]:
    """Ensure every extension carries its leading dot"""
    return [ext if ext.startswith(".") else f".{ext}" for ext in extensions]


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use OVUS_ prefix.

    Examples:
        OVUS_STRICT_MODE=true
        OVUS_MODULE_EXPORT=template
        OVUS_REPORT_FILENAME=templates.json
    """

    model_config = SettingsConfigDict(
        env_prefix="OVUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Reader configuration
    html_extensions: List[str] = Field(
        default_factory=lambda: [".html"],
        description="File extensions read as literal HTML template text",
    )

    module_extensions: List[str] = Field(
        default_factory=lambda: [".py"],
        description="File extensions imported as Python template modules",
    )

    module_export: str = Field(
        default="default",
        description="Module attribute holding the template text or a function returning it",
    )

    ignore_globs: List[str] = Field(
        default_factory=lambda: ["**/__pycache__/**"],
        description="Globs always excluded from template discovery (the whitelist still applies)",
    )

    options_filename: str = Field(
        default="ovus.yaml",
        description="Name of the optional reader options file in the input directory",
    )

    # Extraction configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: abort on the first malformed directive instead of recording it",
    )

    # Output configuration
    report_filename: str = Field(
        default="directives.json",
        description="Name of the JSON directive report written to the output directory",
    )

    highlight_style: str = Field(
        default="monokai",
        description="Pygments style used for highlighted template output",
    )

    @field_validator("html_extensions", "module_extensions")
    @classmethod
    def extensions_check(cls, value: List[str]) -> List[str]:
        return extensions_normalize(value)

    def templateName_make(self, path: Path) -> str:
        """
        Derive a logical template name from a file path.

        Example:
            >>> settings = AppSettings()
            >>> settings.templateName_make(Path("components/eg-button.html"))
            'eg-button'
        """
        return Path(path).stem


# Singleton instance - import this in your code
appsettings = AppSettings()
