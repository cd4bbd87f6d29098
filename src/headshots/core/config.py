"""Configuration management for Headshots Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the HEADSHOTS_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (HEADSHOTS_* prefix)
2. .env file in the project root
3. Default values defined in HeadshotsConfig

Example .env file:
    HEADSHOTS_SERVICE_BASE_URL=https://images.example.com/api
    HEADSHOTS_SERVICE_API_KEY=sk-...
    HEADSHOTS_DOWNLOADS_DIR=downloads
    HEADSHOTS_DOWNLOAD_DELAY_SECONDS=0.5

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from headshots.core.config import config

    print(config.max_upload_bytes)
    print(config.downloads_dir)

Upload Policy
-------------
- max_upload_bytes: uploads above this size are rejected (10 MiB)
- allowed_media_types: declared MIME types accepted as-is. HEIC/HEIF files
  are also accepted by extension, since many browsers declare them with an
  empty or generic type.

Quantity Bounds
---------------
min_quantity and max_quantity bound the number of headshots requested per
generation. The UI and the request builder both clamp to this range.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_MEDIA_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/heic",
    "image/heif",
)


class HeadshotsConfig(BaseSettings):
    """Main configuration for Headshots Studio.

    Values are loaded from environment variables with the HEADSHOTS_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Upload Settings:
        max_upload_bytes : int
            Largest accepted upload, in bytes
        allowed_media_types : tuple[str, ...]
            Declared MIME types accepted without an extension check
        heic_quality : float
            Quality factor used when converting HEIC/HEIF to PNG (0-1)

    Generation Settings:
        min_quantity / max_quantity : int
            Bounds for the number of headshots per request
        default_quantity : int
            Quantity preselected in the wizard
        output_size : str
            Requested output size, as "WIDTHxHEIGHT"
        response_format : str
            Result format requested from the service ("url")

    Generation Service:
        service_base_url : str
            Base URL of the hosted generation service
        service_api_key : str
            Bearer token for the service (empty disables the header)
        service_project_id : str
            Project identifier sent with every request
        request_timeout_seconds : float
            Timeout for upload, generation and download requests

    Downloads:
        download_delay_seconds : float
            Pause between successive downloads in a batch
        downloads_dir : Path
            Directory where downloaded headshots are saved
        previews_dir : Path
            Directory for upload preview files

    UI Settings:
        gradio_server_name : str
            Server bind address
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Notes
    -----
    - All directories are created automatically if they don't exist
    - To modify config, set environment variables and restart the application
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HEADSHOTS_",
        case_sensitive=False,
    )

    # Upload policy
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum upload size in bytes (10MB)",
        ge=1,
    )
    allowed_media_types: tuple[str, ...] = Field(
        default=DEFAULT_ALLOWED_MEDIA_TYPES,
        description="Declared MIME types accepted for upload",
    )
    heic_quality: float = Field(
        default=0.9,
        description="Quality factor for HEIC/HEIF conversion",
        ge=0.0,
        le=1.0,
    )

    # Generation settings
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: int = Field(default=12, ge=1)
    default_quantity: int = Field(default=4, ge=1)
    output_size: str = Field(
        default="1024x1024",
        description="Output size requested from the generation service",
        pattern=r"^\d+x\d+$",
    )
    response_format: str = Field(
        default="url",
        description="Result format requested from the generation service",
    )

    # Generation service
    service_base_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the hosted generation service",
    )
    service_api_key: str = Field(
        default="",
        description="Bearer token for the generation service",
    )
    service_project_id: str = Field(
        default="ai-headshot-generator",
        description="Project identifier sent to the generation service",
    )
    request_timeout_seconds: float = Field(
        default=120.0,
        description="Timeout for service and download requests",
        gt=0,
    )

    # Downloads
    download_delay_seconds: float = Field(
        default=0.5,
        description="Delay between successive downloads in a batch",
        ge=0.0,
    )
    downloads_dir: Path = Field(
        default=Path("downloads"),
        description="Directory to save downloaded headshots",
    )
    previews_dir: Path = Field(
        default=Path(".previews"),
        description="Directory for upload preview files",
    )

    # UI settings
    gradio_server_name: str = Field(
        default="127.0.0.1",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        self.previews_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (HEADSHOTS_* prefix) and .env file.
config = HeadshotsConfig()
