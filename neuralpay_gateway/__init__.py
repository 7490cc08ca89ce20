"""NeuralPay Gateway - task envelope proxy for a generative-AI provider.

A Python library that routes ``{task, payload}`` envelopes to one of six
fixed task handlers (chat, image editing, data analysis, translation, audio
transcription, code generation) and normalizes the provider's answer.

Usage:
    >>> from neuralpay_gateway import GatewayConfig, GeminiProvider, TaskRouter
    >>>
    >>> router = TaskRouter(GeminiProvider(GatewayConfig(api_key="...")))
    >>> result = await router.dispatch(
    ...     {"task": "translate", "payload": {"text": "Hello", "from": "English", "to": "German"}}
    ... )
    >>> print(result.status_code, result.body)
"""

__version__ = "0.1.0"

# Public library API exports
from neuralpay_gateway.core.config import GatewayConfig
from neuralpay_gateway.core.models import (
    AnalysisResult,
    AudioTranscribePayload,
    ChatPayload,
    CodeAssistPayload,
    DataAnalysisPayload,
    ImageEditPayload,
    InlineData,
    TranslatePayload,
)
from neuralpay_gateway.core.provider import GeminiProvider, Provider
from neuralpay_gateway.core.routing import TaskKind, TaskResult, TaskRouter

# Export exceptions for library users
from neuralpay_gateway.core.exceptions import (
    ConfigurationError,
    GatewayError,
    InvalidTaskError,
    UpstreamError,
    UpstreamInvalidResponseError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

__all__ = [
    "__version__",
    # Configuration
    "GatewayConfig",
    # Routing
    "TaskRouter",
    "TaskKind",
    "TaskResult",
    # Providers
    "Provider",
    "GeminiProvider",
    # Models
    "ChatPayload",
    "ImageEditPayload",
    "AudioTranscribePayload",
    "DataAnalysisPayload",
    "TranslatePayload",
    "CodeAssistPayload",
    "InlineData",
    "AnalysisResult",
    # Exceptions
    "GatewayError",
    "ConfigurationError",
    "InvalidTaskError",
    "UpstreamError",
    "UpstreamInvalidResponseError",
    "UpstreamTimeoutError",
    "UpstreamUnreachableError",
]
