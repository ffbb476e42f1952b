"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CLFORMAT_ prefix (e.g., CLFORMAT_CACHE_MAXSIZE=0).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use CLFORMAT_ prefix.

    Examples:
        CLFORMAT_CACHE_MAXSIZE=1024
        CLFORMAT_COMMA_CHAR=_
        CLFORMAT_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="CLFORMAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Template cache configuration
    cache_maxsize: int = Field(
        default=256,
        ge=0,
        description="Number of parsed templates kept by template_compile() (0 disables caching)",
    )

    # Decimal directive defaults
    comma_char: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Default digit group separator for ~:D",
    )

    comma_interval: int = Field(
        default=3,
        ge=1,
        description="Default number of digits per group for ~:D",
    )

    # Diagnostics
    debug_mode: bool = Field(
        default=False,
        description="Print tracebacks for render failures in the command line front end",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
