"""Errors raised by the CloudConvert client.

Every failure derives from `CloudConvertError`:

- `TransportError`: no usable HTTP response was obtained (DNS, connection,
  timeout, redirect loop, broken content encoding)
- `ServiceError`: the service answered with a status other than 200
- `DecodeError`: a 200 response looked like JSON but could not be parsed
"""

from __future__ import annotations


class CloudConvertError(Exception):
    """Base CloudConvert client error."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(CloudConvertError):
    """Raised when the request fails before any HTTP response is received."""


class ServiceError(CloudConvertError):
    """Raised when the service returns any HTTP status other than 200."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str,
        error: str | None = None,
        code: int | str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.error = error
        self.code = code

    @classmethod
    def from_service_error(cls, error: object, code: object, status_code: int, body: str) -> "ServiceError":
        """Build from the `error`/`code` pair the service reports in its JSON body."""
        return cls(f"{error} (code {code})", status_code, body, error=str(error), code=code)  # type: ignore[arg-type]

    @classmethod
    def from_raw_response(cls, status_code: int, body: str) -> "ServiceError":
        return cls(f"HTTP {status_code}: {body}", status_code, body)


class DecodeError(CloudConvertError):
    """Raised when a JSON-shaped response body cannot be decoded."""

    def __init__(self, message: str, body: str):
        super().__init__(message)
        self.body = body
