"""Custom exception hierarchy for the re-encryption proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class MissingTarget(ProxyError):
    """The X-Target-URL header is absent, empty, or not valid text.

    Attributes:
        reason: 'absent', 'empty' or 'undecodable'; the response is the same
            for all three, the reason only shows up in logs
    """

    def __init__(self, reason: str = "absent") -> None:
        super().__init__("Missing X-Target-URL header")
        self.reason = reason


class ForwardError(ProxyError):
    """Raised when a request could not be forwarded to its target.

    Attributes:
        target_url: URL the proxy tried to reach
    """

    def __init__(self, message: str, target_url: str | None = None) -> None:
        super().__init__(message)
        self.target_url = target_url


class DispatchFailed(ForwardError):
    """The outbound request could not be completed."""


class DecodeFailed(ForwardError):
    """The target's response body is not valid JSON."""


class ProxyRequestFailed(ProxyError):
    """Raised by the requester when the proxy answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code returned by the proxy
        body: Raw response text
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Request failed with status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ProxyResponseInvalid(ProxyError):
    """Raised by the requester when a successful response is not JSON."""
