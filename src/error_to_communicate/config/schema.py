"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HEURISTIC_NAMES = [
    "wrong_number_of_arguments",
    "no_method_error",
    "load_error",
    "syntax_error",
    "exception",
]


class ThemeConfig(BaseModel):
    """Terminal theme configuration."""

    color: bool = True
    separator_width: int = Field(70, ge=10, le=400)


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("error-to-communicate.log")


class LoggingConfig(BaseModel):
    """Logging configuration.

    Logs share stderr with the report, so the default level keeps them quiet.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class ReporterConfig(BaseSettings):
    """Root configuration for error reporting."""

    heuristics: list[str] = DEFAULT_HEURISTIC_NAMES
    blacklist: list[str] = ["SystemExit"]
    project_root: Path | None = None
    theme: ThemeConfig = ThemeConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="ERROR_TO_COMMUNICATE_",
        env_nested_delimiter="__",
    )

    @field_validator("heuristics")
    @classmethod
    def validate_heuristics(cls, v: list[str]) -> list[str]:
        """Validate heuristic names and that the catchall comes last."""
        from ..core.heuristics import CATCHALL, HEURISTICS_BY_NAME

        for name in v:
            if name not in HEURISTICS_BY_NAME:
                raise ValueError(
                    f"Unknown heuristic: {name}. Expected one of: {', '.join(HEURISTICS_BY_NAME)}"
                )
        if not v or v[-1] != CATCHALL.name:
            raise ValueError(f"Heuristics must end with the catchall '{CATCHALL.name}'")
        if v.count(CATCHALL.name) > 1:
            raise ValueError(f"The catchall '{CATCHALL.name}' may only appear once")
        return v
