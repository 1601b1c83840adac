"""Skellige configuration.

All settings support environment variable overrides with SKELLIGE_ prefix.

Usage:
    from skellige.config import settings

    print(settings.remote)
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["SkelligeSettings", "settings"]


class SkelligeSettings(BaseSettings):
    """Skellige configuration.

    For example, SKELLIGE_REMOTE=upstream makes url() and update() use the
    ``upstream`` remote instead of ``origin``.
    """

    model_config = SettingsConfigDict(env_prefix="SKELLIGE_")

    log_level: str = Field(
        default="info",
        description="Logging level (debug, info, warning, error)",
    )
    log_format: str = Field(
        default="console",
        description="Log output format: 'console' or 'json'",
    )
    remote: str = Field(
        default="origin",
        description="Remote used to resolve the repo url and to fetch updates",
    )
    progress: bool = Field(
        default=False,
        description="Report clone/fetch progress on stderr from the CLI",
    )


# Module-level singleton
settings = SkelligeSettings()
