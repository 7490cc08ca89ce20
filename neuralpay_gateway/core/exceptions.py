"""Custom exceptions for the NeuralPay gateway core library."""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(GatewayError):
    """Raised when there is a configuration problem."""

    pass


class InvalidTaskError(GatewayError):
    """Raised when an envelope names a task kind the router does not know."""

    def __init__(self, task: object):
        self.task = task
        super().__init__(f"Unknown task: {task!r}")


class UpstreamError(GatewayError):
    """Base class for provider-related errors."""

    def __init__(self, message: str, upstream: str | None = None, status_code: int | None = None):
        self.upstream = upstream
        self.status_code = status_code
        super().__init__(message)


class UpstreamUnreachableError(UpstreamError):
    """Raised when the provider is unreachable."""

    pass


class UpstreamTimeoutError(UpstreamError):
    """Raised when a request to the provider times out."""

    pass


class UpstreamInvalidResponseError(UpstreamError):
    """Raised when the provider answers with a body we cannot interpret."""

    pass
