"""Configuration management for imageform.

This module provides centralized configuration using Pydantic Settings.
Values are read from plain (unprefixed) environment variables so the service
can be dropped into the same deployment as the form page it backs.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables
2. .env file in the working directory
3. Default values defined in ImageformConfig

Example .env file:
    API_HOST=0.0.0.0
    API_PORT=3000
    LOG_LEVEL=debug
    OPENAI_API_KEY=sk-...

Usage Example
-------------
    from imageform.core.config import ImageformConfig

    settings = ImageformConfig()
    print(settings.api_host, settings.api_port)

Unlike a module-level singleton, the configuration is built by whoever owns
the application (``create_app`` or ``main``) and passed down explicitly.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Package-relative asset directories.
_PACKAGE_DIR = Path(__file__).resolve().parent.parent


class ImageformConfig(BaseSettings):
    """Main configuration for the imageform server.

    Attributes
    ----------
    Server Settings:
        port : str
            Declared for compatibility with existing deployments.  Not used
            by the listener; ``api_port`` is.
        api_port : int
            Port the HTTP server binds to (1-65535).
        api_host : str
            Interface the HTTP server binds to.
        log_level : Literal[...]
            Logger verbosity, also passed to uvicorn.

    Provider Settings:
        openai_api_key : str | None
            Credential for the image provider.  When unset the OpenAI SDK
            falls back to its own lookup and fails at startup.
        image_model : str
            Provider model identifier.

    Paths:
        templates_dir : Path
            Directory holding ``index.html``.
        views_dir : Path
            Directory served under ``/views/``.

    Examples
    --------
        >>> custom = ImageformConfig(api_port=8080, log_level="debug")
        >>> custom.api_port
        8080
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    port: str = Field(
        default="3000",
        description="Declared port (kept for compatibility, not used by the listener)",
    )
    api_port: int = Field(
        default=3000,
        description="Port the HTTP server listens on",
        ge=1,
        le=65535,
    )
    api_host: str = Field(
        default="127.0.0.1",
        description="Interface the HTTP server binds to",
    )
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = Field(
        default="info",
        description="Logger verbosity",
    )

    # Provider settings
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key used for image generation",
    )
    image_model: str = Field(
        default="dall-e-2",
        description="Image model used by the provider (tier sizes are DALL-E 2 sizes)",
    )

    # Paths
    templates_dir: Path = Field(
        default=_PACKAGE_DIR / "templates",
        description="Directory containing the form page template",
    )
    views_dir: Path = Field(
        default=_PACKAGE_DIR / "views",
        description="Directory of static assets served under /views/",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> object:
        """Accept ``INFO`` or ``Debug`` spellings as well as lowercase."""
        if isinstance(value, str):
            return value.strip().lower()
        return value
