from typing import Optional


class TwillioMockClientError(Exception):
    """Base class for every failure raised by the client."""


class TwillioMockConfigError(TwillioMockClientError, ValueError):
    """The client was constructed with an unusable configuration."""


class TwillioMockConnectionError(TwillioMockClientError):
    """The request never got a response (refused, reset, DNS, TLS...)."""


class TwillioMockTimeoutError(TwillioMockClientError):
    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Request timeout: Mock server did not respond within {timeout_ms}ms"
        )


class TwillioMockResponseError(TwillioMockClientError):
    """Non-2xx status, or a 2xx body that is not the expected shape."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Mock server returned error: {status_code} - {body}")
