"""Configuration management for CraftAI Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the CRAFTAI_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (CRAFTAI_* prefix)
2. .env file in the project root
3. Default values defined in CraftAIConfig

The Gemini API key is the one exception to the prefix rule: it is also read
from the plain ``GEMINI_API_KEY`` variable, which is the name used by Google's
own tooling.

Example .env file:
    GEMINI_API_KEY=your-key-here
    CRAFTAI_GEMINI_MODEL=gemini-2.5-pro
    CRAFTAI_SERVER_PORT=5000
    CRAFTAI_UPLOADS_DIR=uploads

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from craftai.core.config import config

    print(config.gemini_model)
    print(config.uploads_dir)

Directory Management
--------------------
The configuration creates ``uploads_dir`` on initialization.  Uploaded images
are written there only while they are being analysed.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CraftAIConfig(BaseSettings):
    """Main configuration for CraftAI Studio.

    Attributes
    ----------
    Generator Settings:
        gemini_api_key : str | None
            API key for the Gemini Developer API.  ``None`` is accepted at
            startup; the first generator call then fails with a 401.
        gemini_model : str
            Gemini model name used for every generator call.

    Application Settings:
        demo_user_id : str
            Identifier of the user every request acts on behalf of.
        activity_limit : int
            Maximum number of items in the recent-activity feed.
        market_trends_default_craft : str
            Craft type used when ``/api/market-trends`` gets no query value.

    Uploads:
        uploads_dir : Path
            Scratch directory for uploaded images.
        max_upload_bytes : int
            Upload size ceiling (10 MiB by default).

    Server Settings:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Port for uvicorn (1024-65535).
        log_level : str
            Root logging level applied by ``main()``.
        cors_origins : list[str]
            Allowed CORS origins.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CRAFTAI_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Generator settings
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CRAFTAI_GEMINI_API_KEY", "GEMINI_API_KEY", "gemini_api_key"),
        description="Gemini Developer API key",
    )
    gemini_model: str = Field(
        default="gemini-2.5-pro",
        description="Gemini model used for all generator calls",
    )

    # Application settings
    demo_user_id: str = Field(
        default="demo-user-1",
        description="User id every request acts on behalf of",
    )
    activity_limit: int = Field(
        default=10,
        description="Maximum number of recent-activity items",
        ge=1,
        le=100,
    )
    market_trends_default_craft: str = Field(
        default="Pottery",
        description="Craft type used when no craft_type query value is given",
    )

    # Uploads
    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Scratch directory for uploaded images",
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted upload size in bytes",
        ge=1,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=5000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the uploads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.uploads_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (CRAFTAI_* prefix) and .env file.
config = CraftAIConfig()
