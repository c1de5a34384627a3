"""Exceptions raised by the request engine.

Validation and URL errors are recovered at the form boundary and never reach
the network. Transport errors are captured into the error variant of a
``RunResult``. None of them is fatal to a session.
"""


class BenchLabError(Exception):
    """Base class for engine errors."""


class CatalogError(BenchLabError):
    """Raised when a profile record cannot be loaded into a ``Profile``."""


class ValidationError(BenchLabError, ValueError):
    """Raised when a form field is missing or is not valid JSON."""

    def __init__(self, field: str, detail: str, message: str | None = None) -> None:
        self.field = field
        self.detail = detail
        super().__init__(message or f'Field "{field}" is not valid JSON ({detail}).')


class MissingFieldError(ValidationError):
    """Raised when Base URL or Endpoint is blank."""

    def __init__(self, field: str) -> None:
        super().__init__(field, "value is required", "Fill in Base URL and Endpoint before running the request.")


class UrlError(BenchLabError, ValueError):
    """Raised when base URL and path do not form an absolute http(s) URL."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid URL: {detail}")


class TransportError(BenchLabError):
    """Wraps any failure raised while sending a request or reading its body."""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "TransportError":
        message = str(exc).strip() or type(exc).__name__
        error = cls(message)
        error.__cause__ = exc
        return error


class BusyError(BenchLabError):
    """Raised when a run is requested while another one is still in flight."""
