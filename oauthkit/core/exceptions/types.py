import httpx


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code or httpx.codes.INTERNAL_SERVER_ERROR
        self.details = details
        super().__init__(message)


class ConfigurationException(AppException):
    """Exception raised when a provider or signature method is misconfigured."""

    def __init__(
        self,
        message: str = "OAuth configuration error.",
        details: dict | None = None,
    ):
        super().__init__(message, httpx.codes.INTERNAL_SERVER_ERROR, details)


class AuthenticationException(AppException):
    """Exception raised for authentication-related errors."""

    def __init__(
        self,
        message: str = "Authentication failed.",
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, status_code or httpx.codes.UNAUTHORIZED, details)


class OAuthException(AuthenticationException):
    """
    Exception raised when a provider response breaks the OAuth protocol.

    ``step`` names the handshake step (``request_token``, ``access_token``,
    ``user_info``) and ``field`` the parameter that was missing or unreadable,
    so integration mismatches can be diagnosed from the message alone.
    """

    def __init__(
        self,
        message: str = "OAuth authentication failed.",
        step: str | None = None,
        field: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, status_code or httpx.codes.BAD_REQUEST, details)
        self.step = step
        self.field = field


class TransportException(OAuthException):
    """Exception raised when a request could not be completed or was rejected."""

    def __init__(
        self,
        message: str = "OAuth provider request failed.",
        step: str | None = None,
        url: str | None = None,
        upstream_status: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            message,
            step=step,
            status_code=httpx.codes.BAD_GATEWAY,
            details=details,
        )
        self.url = url
        self.upstream_status = upstream_status


__all__ = [
    "AppException",
    "ConfigurationException",
    "AuthenticationException",
    "OAuthException",
    "TransportException",
]
