"""
Remote almanac error taxonomy.

Every failure of the remote fetch path is raised as a PanchangamAPIError
subclass; transport exceptions never leave the client.
"""


class PanchangamAPIError(Exception):
    """Base exception for remote almanac failures"""

    code = "api_error"
    user_message = "Unable to load Panchangam data"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)


class MalformedRequestError(PanchangamAPIError):
    """Request could not be built (bad URL or parameters)"""

    code = "malformed_request"
    user_message = "Invalid request"


class NetworkUnreachableError(PanchangamAPIError):
    """Server could not be reached"""

    code = "network_unreachable"
    user_message = "No internet connection. Please check your network."


class TimedOutError(PanchangamAPIError):
    """Request exceeded its time budget"""

    code = "timed_out"
    user_message = "Request timed out. Please try again."


class HTTPStatusError(PanchangamAPIError):
    """Non-2xx response not covered by a more specific error"""

    code = "http_status"

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Server error ({status_code})")

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Server error ({self.status_code})"


class DecodeError(PanchangamAPIError):
    """Response body could not be decoded"""

    code = "decode_failure"
    user_message = "Failed to process server response"


class MappingError(DecodeError):
    """Decoded response could not be mapped into a PanchangamDay"""

    code = "mapping_failure"


class UnauthorizedError(PanchangamAPIError):
    """API key rejected (401/403)"""

    code = "unauthorized"
    user_message = "Authentication failed. Please contact support."


class RateLimitedError(PanchangamAPIError):
    """Too many requests (429)"""

    code = "rate_limited"
    user_message = "Too many requests. Please wait a moment."

    def __init__(self, retry_after: float | None = None, message: str | None = None):
        self.retry_after = retry_after
        super().__init__(message)


class MissingCredentialError(PanchangamAPIError):
    """No API key configured outside development"""

    code = "missing_credential"
    user_message = "API configuration error. Please contact support."


class ServerUnavailableError(PanchangamAPIError):
    """Backend temporarily unavailable (502/503/504)"""

    code = "server_unavailable"
    user_message = "Server temporarily unavailable. Please try again later."
