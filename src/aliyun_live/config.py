"""Configuration settings for the Aliyun Live client."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "https://live.aliyuncs.com/"
DEFAULT_API_VERSION = "2016-11-01"
DEFAULT_VIDEO_CENTER = "video-center.alivecdn.com"


class Config(BaseSettings):
    """Configuration for the Live API connection and stream signing."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API credentials
    aliyun_access_key_id: str = Field(
        default="",
        description="Aliyun AccessKey ID",
    )
    aliyun_access_key_secret: str = Field(
        default="",
        description="Aliyun AccessKey secret",
    )

    # RPC endpoint settings
    live_endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Live API endpoint URL",
    )
    live_api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="Live API version sent with every request",
    )
    live_format: str = Field(
        default="JSON",
        description="Response format requested from the API (JSON or XML)",
    )
    live_http_timeout: float = Field(
        default=10.0,
        description="HTTP timeout in seconds",
    )

    # Controller defaults
    live_domain_name: str = Field(
        default="",
        description="CDN acceleration domain used as the vhost",
    )
    live_app_name: str = Field(
        default="",
        description="Default application name; empty means the parameter is omitted",
    )
    live_video_center: str = Field(
        default=DEFAULT_VIDEO_CENTER,
        description="Video center server (or a CNAME pointing at it) used for publish URLs",
    )

    # Stream URL signing
    # Empty private key disables auth_key signing
    stream_private_key: str = Field(
        default="",
        description="Private key for signing publish/playback URLs",
    )
    stream_auth_timeout: int = Field(
        default=1800,
        description="Validity window of signed stream URLs in seconds",
    )

    live_debug: bool = Field(
        default=False,
        description="Log request parameters and raw response bodies",
    )

    @field_validator("live_format", mode="after")
    @classmethod
    def parse_format(cls, v: str) -> str:
        """Normalize the response format and reject unsupported values."""
        fmt = v.strip().upper()
        if fmt not in ("JSON", "XML"):
            raise ValueError(f"live_format must be JSON or XML, got {v!r}")
        return fmt

    @field_validator("stream_auth_timeout", mode="after")
    @classmethod
    def check_auth_timeout(cls, v: int) -> int:
        """Signed URLs need a positive validity window."""
        if v <= 0:
            raise ValueError("stream_auth_timeout must be positive")
        return v
