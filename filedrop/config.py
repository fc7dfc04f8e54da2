"""Client configuration."""

from pathlib import Path

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"


class ClientConfig(BaseSettings):
    """
    Client configuration.

    Uses Pydantic BaseSettings for automatic environment variable loading.
    Environment variables are prefixed with FILEDROP_.

    Required environment variables:
        FILEDROP_ORIGIN: Origin of the storage service (e.g., "http://localhost:8080")

    Optional environment variables:
        FILEDROP_TIMEOUT: Request timeout in seconds (default: 30)
        FILEDROP_DOWNLOAD_DIR: Directory downloads are saved to (default: ".")
        FILEDROP_IP_LOOKUP_URL: JSON service returning {"ip": ...}
    """

    model_config = SettingsConfigDict(
        env_prefix="FILEDROP_",
        extra="ignore",
    )

    # Page origin - required, validated as URL
    origin: HttpUrl

    # Request timeout (seconds)
    timeout: float = Field(default=30.0, gt=0)

    # Where downloads are written
    download_dir: Path = Path(".")

    # Public IP lookup service, cosmetic only
    ip_lookup_url: HttpUrl = Field(default=DEFAULT_IP_LOOKUP_URL, validate_default=True)
