"""Custom exceptions for schemareg."""

from typing import Optional

_MISSING = object()


class SchemaRegistryError(Exception):
    """Base exception for all schemareg errors."""
    pass


class TransportError(SchemaRegistryError):
    """Raised when the request never produced an HTTP response.

    Connection refused, DNS failures and broken connections all land here.
    The underlying httpx exception is kept in ``original``.
    """

    def __init__(self, message: str, original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original


class RegistryTimeoutError(TransportError):
    """Raised when the registry did not answer within the configured timeouts."""
    pass


class ResponseCodeError(SchemaRegistryError):
    """Raised when the registry answers with any status other than 200."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Bad response code: {status_code}")
        self.status_code = status_code
        self.body = body


class DecodingError(SchemaRegistryError):
    """Raised when a success response body does not have the expected JSON shape."""
    pass


class FieldTypeError(DecodingError):
    """Raised when an expected response field is missing or has the wrong type."""

    def __init__(self, field: str, expected: str, actual: object = _MISSING):
        if actual is _MISSING:
            message = f"Response field '{field}' is missing (expected {expected})"
        else:
            message = (
                f"Response field '{field}' has type {type(actual).__name__}, "
                f"expected {expected}"
            )
        super().__init__(message)
        self.field = field


class ClientClosedError(SchemaRegistryError):
    """Raised when a caller-supplied HTTP client was closed before the request."""
    pass
