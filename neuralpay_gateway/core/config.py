"""Simple configuration for core library usage."""

from dataclasses import dataclass

DEFAULT_PROVIDER_BASE_URL = "https://generativelanguage.googleapis.com"


@dataclass
class GatewayConfig:
    """Configuration for the NeuralPay gateway core library.

    This is a simplified config suitable for library usage without
    environment variable loading.

    Args:
        api_key: Provider API key; a missing key fails on the first provider call
        base_url: Root URL of the Gemini REST API
        api_version: API version path segment
        chat_model: Model used for the chat task
        text_model: Model used for text and schema-constrained JSON completions
        image_model: Image-capable model used for the image-edit task
        timeout_s: Total timeout for provider requests in seconds
        connect_timeout_s: Connection timeout for provider requests in seconds
    """

    api_key: str | None = None
    base_url: str = DEFAULT_PROVIDER_BASE_URL
    api_version: str = "v1beta"
    chat_model: str = "gemini-2.5-flash"
    text_model: str = "gemini-2.5-flash"
    image_model: str = "gemini-2.5-flash-image-preview"
    timeout_s: float = 300.0
    connect_timeout_s: float = 10.0

    def model_url(self, model: str) -> str:
        """Return the generateContent URL for the given model."""
        return f"{self.base_url.rstrip('/')}/{self.api_version}/models/{model}:generateContent"
