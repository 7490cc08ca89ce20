"""Configuration management - loads environment variables into typed settings."""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from neuralpay_gateway.core.config import DEFAULT_PROVIDER_BASE_URL, GatewayConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gateway Server Configuration
    gateway_host: str = Field(default="127.0.0.1", description="Host for the gateway to listen on")
    gateway_port: int = Field(default=8090, description="Port for the gateway to listen on")
    proxy_path: str = Field(default="/api/gemini", description="Path of the task envelope endpoint")

    # AI Provider Configuration
    api_key: str | None = Field(
        default=None,
        description="API key for the AI provider. Missing keys surface as a 500 on the first provider call",
    )
    provider_base_url: str = Field(
        default=DEFAULT_PROVIDER_BASE_URL,
        description="Root URL of the Gemini REST API",
    )
    api_version: str = Field(default="v1beta", description="Gemini REST API version segment")
    chat_model: str = Field(default="gemini-2.5-flash", description="Model for the chat task")
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Model for translate, audio-transcribe, code-assist and data-analysis",
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Image-capable model for the image-edit task",
    )

    # Timeout Configuration
    upstream_timeout_s: float = Field(
        default=300.0,
        description="Total timeout for provider requests (seconds)",
    )
    upstream_connect_timeout_s: float = Field(
        default=10.0,
        description="Connection timeout for provider requests (seconds)",
    )

    # CORS Configuration
    allow_origins: str = Field(
        default="",
        description="CORS allowed origins (comma-separated list, empty = no CORS)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_request_bodies: str = Field(
        default="0",
        description="Log request bodies (1 = enabled, 0 = disabled). WARNING: Only enable in development",
    )

    @field_validator("gateway_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError(f"gateway_port must be between 1 and 65535, got {v}")
        return v

    @field_validator("proxy_path")
    @classmethod
    def validate_proxy_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"proxy_path must start with '/', got {v}")
        return v

    @field_validator("upstream_timeout_s", "upstream_connect_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("provider_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got {v}")
        if not parsed.netloc:
            raise ValueError(f"URL must have a valid host, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    @field_validator("log_request_bodies")
    @classmethod
    def validate_boolean_string(cls, v: str) -> str:
        """Validate boolean string format."""
        v_lower = v.lower().strip()
        if v_lower not in ("0", "1", "true", "false", "yes", "no"):
            raise ValueError(f"Boolean field must be '0', '1', 'true', 'false', 'yes', or 'no', got {v}")
        return v

    @property
    def allow_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if not self.allow_origins:
            return []
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    @property
    def log_request_bodies_bool(self) -> bool:
        """Convert log_request_bodies string to boolean."""
        v = self.log_request_bodies.lower().strip()
        return v in ("1", "true", "yes")

    def to_gateway_config(self) -> GatewayConfig:
        """Build the core library configuration from these settings."""
        return GatewayConfig(
            api_key=self.api_key or None,
            base_url=self.provider_base_url,
            api_version=self.api_version,
            chat_model=self.chat_model,
            text_model=self.text_model,
            image_model=self.image_model,
            timeout_s=self.upstream_timeout_s,
            connect_timeout_s=self.upstream_connect_timeout_s,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If settings are invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your .env file and ensure all settings are valid."
        ) from e
