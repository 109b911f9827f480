"""Application configuration via pydantic-settings."""

from pathlib import Path
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True, validate_default=True
    )

    # Listener
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Asset trees – relative paths resolve against the working directory
    PUBLIC_DIR: str = "public"
    DIST_DIR: str = "dist"

    # TLS (the CLI arguments take precedence)
    SSL_CERT: Optional[str] = None
    SSL_KEY: Optional[str] = None

    # Serve HTTPS on PORT + 1 and redirect plain HTTP on PORT to it
    HTTPS_REDIRECT: bool = False

    # Cache-Control header for served files; unset sends none
    CACHE_CONTROL: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "info"
    ACCESS_LOG: bool = False

    @field_validator("PUBLIC_DIR", "DIST_DIR")
    @classmethod
    def _absolute_dir(cls, value: str) -> str:
        """Resolve relative directories against the working directory at build time."""
        return str(Path(value).resolve())

    @property
    def tls_enabled(self) -> bool:
        return bool(self.SSL_CERT and self.SSL_KEY)

    @property
    def https_port(self) -> int:
        """Port of the HTTPS listener."""
        if self.tls_enabled and self.HTTPS_REDIRECT:
            return self.PORT + 1
        return self.PORT

    @property
    def public_root(self) -> Path:
        return Path(self.PUBLIC_DIR)

    @property
    def dist_root(self) -> Path:
        return Path(self.DIST_DIR)


def build_settings(**overrides) -> Settings:
    """Build settings from the environment, ``.env`` and explicit overrides."""
    return Settings(**overrides)
