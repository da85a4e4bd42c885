"""Custom exception hierarchy for the CORS relay."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class TargetDecodeError(ProxyError):
    """Raised when a target URL contains a malformed percent escape."""


class UpstreamError(ProxyError):
    """Raised when the upstream request fails.

    Attributes:
        message: Error message
        target_url: URL the request was relayed to (optional)
    """

    def __init__(self, message: str, target_url: str | None = None) -> None:
        super().__init__(message)
        self.target_url = target_url


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream does not answer within the relay timeout."""
