"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use IFDEFPP_ prefix (e.g., IFDEFPP_STRICT_ENDIF=false).

Settings can also be loaded from a .env file in the working directory. They
provide the defaults of the command line; the preprocess() function itself
takes everything it needs as arguments.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Examples:
        IFDEFPP_ENCODING=latin-1
        IFDEFPP_FILE_PATTERN=**/*.js
        IFDEFPP_STRICT_ENDIF=false
        IFDEFPP_FAIL_FAST=true
    """

    model_config = SettingsConfigDict(
        env_prefix="IFDEFPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read input files and write output files",
    )

    file_pattern: str = Field(
        default="**/*",
        description="Glob (relative to inputdir) selecting the files to preprocess",
    )

    strict_endif: bool = Field(
        default=True,
        description="Treat an @endif with no open block as an error instead of ignoring it",
    )

    fail_fast: bool = Field(
        default=False,
        description="Stop at the first file that fails to preprocess",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
