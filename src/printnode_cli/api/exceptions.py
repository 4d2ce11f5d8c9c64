"""Exceptions for the PrintNode API."""


class PrintNodeError(Exception):
    """Base exception for PrintNode client errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(PrintNodeError):
    """Input rejected client-side before any request was sent."""


class RequestError(PrintNodeError):
    """The API answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        path: str | None = None,
    ):
        super().__init__(message, status_code)
        self.body = body
        self.path = path


class AuthenticationError(RequestError):
    """API key missing, wrong or revoked."""


class NotFoundError(RequestError):
    """The requested resource does not exist."""


class RateLimitError(RequestError):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str,
        retry_after: int = 60,
        body: str = "",
        path: str | None = None,
    ):
        super().__init__(message, 429, body, path)
        self.retry_after = retry_after


class DecodeError(PrintNodeError):
    """Response body does not match the expected shape."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class TransportError(PrintNodeError):
    """The request never produced an HTTP response."""


class NotConfiguredError(PrintNodeError):
    """No API key could be resolved."""

    def __init__(self, profile: str | None = None):
        msg = "No API key configured"
        if profile and profile != "default":
            msg += f" for profile '{profile}'"
        msg += ". Run 'printnode login' or set PRINTNODE_API_KEY."
        super().__init__(msg)
