"""Error types raised by the onetimesecret client."""
from typing import Optional


class OneTimeSecretError(Exception):
    """Base class for all client errors."""
    pass


class TransportError(OneTimeSecretError):
    """The request could not be built or the service could not be reached."""
    pass


class DecodeError(OneTimeSecretError):
    """A response body did not match the expected schema."""
    pass


class APIError(OneTimeSecretError):
    """
    Error reported by the service (any response with status >= 400).

    Attributes:
        message: Human-readable message decoded from the error body
        status_code: HTTP status of the failed response, when known
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message
