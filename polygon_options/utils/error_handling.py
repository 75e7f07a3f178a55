"""Exception hierarchy and retry helper for the Polygon options client.

Ticker codec failures derive from FormatError (a ValueError), request
validation failures from PolygonValidationError, and transport failures from
PolygonApiError / PolygonHttpError.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar
from functools import wraps
import logging

logger = logging.getLogger("polygon_options.error_handling")

T = TypeVar('T')


class PolygonError(Exception):
    """Base exception for everything raised by this package."""
    pass


# ---------------------------------------------------------------------------
# OCC ticker format errors
# ---------------------------------------------------------------------------

class FormatError(ValueError, PolygonError):
    """Raised when an options ticker or one of its components is malformed.

    Inherits from ValueError so callers can treat it as bad input.
    """
    pass


class MissingPrefixError(FormatError):
    """Ticker string does not start with the 'O:' marker."""
    pass


class TooShortError(FormatError):
    """Ticker body is shorter than the smallest possible OCC symbol."""
    pass


class MalformedSuffixError(FormatError):
    """Date/type/strike suffix does not have the OCC shape."""
    pass


class BadSuffixLengthError(MalformedSuffixError):
    """Suffix after the underlying is not exactly 15 characters."""
    pass


class UnderlyingNotFoundError(FormatError):
    """No digit boundary within the first 1-6 characters of the body."""
    pass


class InvalidDateError(FormatError):
    """Expiration digits do not form a real calendar date in 2000-2099."""
    pass


class InvalidTypeError(FormatError):
    """Option type character is not C or P."""
    pass


class NegativeOrOversizedStrikeError(FormatError):
    """Strike is negative or does not fit in 8 digits once scaled by 1000."""
    pass


class InvalidUnderlyingError(FormatError):
    """Underlying symbol is empty, not letters-only, or longer than 6 characters."""
    pass


class IncompleteBuilderError(FormatError):
    """A builder was asked to build before every required field was set."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} must be set before building")


# ---------------------------------------------------------------------------
# Request validation errors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationError:
    """A single failed validation rule on a request object."""

    property_name: str
    error_message: str
    attempted_value: Any = None

    def __str__(self) -> str:
        return f"{self.property_name}: {self.error_message}"


class PolygonValidationError(ValueError, PolygonError):
    """Raised when a request object fails validation before it is sent."""

    def __init__(self, errors: List[ValidationError]):
        self.errors = list(errors)
        super().__init__(self._build_message(self.errors))

    @staticmethod
    def _build_message(errors: List[ValidationError]) -> str:
        if not errors:
            return "Request validation failed."
        joined = "; ".join(str(error) for error in errors)
        if len(errors) == 1:
            return f"Request validation failed: {joined}"
        return f"Request validation failed with {len(errors)} errors: {joined}"


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class PolygonApiError(PolygonError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(
        self,
        status_code: int,
        request_url: str,
        response_content: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.status_code = status_code
        self.request_url = request_url
        self.response_content = response_content
        super().__init__(self._build_message(status_code, request_url, reason))

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def is_transient(self) -> bool:
        """Rate limits and server errors are worth retrying."""
        return self.is_rate_limited or self.is_server_error

    @staticmethod
    def _build_message(status_code: int, request_url: str, reason: Optional[str]) -> str:
        reason = reason or "Unknown error"
        if status_code == 401:
            return (f"API authentication failed (401 Unauthorized). "
                    f"Please verify your API key is valid. Endpoint: {request_url}")
        if status_code == 403:
            return (f"API access forbidden (403 Forbidden). Your API key may not have "
                    f"permission to access this data. Endpoint: {request_url}")
        if status_code == 404:
            return (f"API resource not found (404 Not Found). The requested ticker or "
                    f"endpoint may be invalid. Endpoint: {request_url}")
        if status_code == 429:
            return (f"API rate limit exceeded (429 Too Many Requests). "
                    f"Please reduce request frequency. Endpoint: {request_url}")
        if status_code >= 500:
            return f"Polygon.io API server error ({status_code} {reason}). Endpoint: {request_url}"
        return f"Polygon.io API error ({status_code} {reason}). Endpoint: {request_url}"


class PolygonHttpError(PolygonError):
    """Raised when the request failed below the HTTP status level.

    Timeouts and connection failures are marked is_network and may be
    retried; an unreadable response body is not.
    """

    def __init__(self, message: str, is_timeout: bool = False, is_network: bool = False):
        self.is_timeout = is_timeout
        self.is_network = is_network or is_timeout
        super().__init__(message)

    @classmethod
    def from_timeout(cls, error: Exception) -> "PolygonHttpError":
        return cls(
            "Request to Polygon.io API timed out. The server may be experiencing high "
            "load or your connection may be slow. Details: " + str(error),
            is_timeout=True,
            is_network=True,
        )

    @classmethod
    def from_request_exception(cls, error: Exception) -> "PolygonHttpError":
        return cls(
            "Network error occurred while communicating with Polygon.io API. "
            "Details: " + str(error),
            is_network=True,
        )


class ConfigurationError(PolygonError):
    """Raised when client configuration is missing or invalid."""
    pass


def is_transient_error(error: Exception) -> bool:
    """Return True for failures that a retry might fix."""
    if isinstance(error, PolygonApiError):
        return error.is_transient
    if isinstance(error, PolygonHttpError):
        return error.is_network
    return False


def retry_with_backoff(
    max_retries: int = 3,
    backoff_factor: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    should_retry: Callable[[Exception], bool] | None = None,
    logger_func: Callable[[str], None] | None = None,
    sleep: Callable[[float], None] | None = None,
):
    """Decorator to retry a function with exponential backoff.

    Args:
        max_retries: Maximum number of attempts (including the first)
        backoff_factor: Wait time before retry N is backoff_factor ** N seconds
        exceptions: Tuple of exception types to catch
        should_retry: Optional predicate; a caught exception for which it
            returns False is re-raised immediately
        logger_func: Optional logging function (defaults to logger.warning)
        sleep: Optional sleep function (defaults to time.sleep)

    Returns:
        Decorated function with retry logic

    Example:
        >>> @retry_with_backoff(max_retries=3, exceptions=(PolygonHttpError,))
        >>> def fetch():
        >>>     return client.get_json("/v3/quotes/O:SPY251219C00650000")

    Raises:
        The original exception if all retries are exhausted
    """
    log_func = logger_func or logger.warning
    attempts = max(1, max_retries)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if should_retry is not None and not should_retry(e):
                        raise
                    if attempt == attempts - 1:
                        logger.error(
                            "Function %s failed after %d attempts: %s",
                            func.__name__, attempts, e
                        )
                        raise

                    wait_time = backoff_factor ** attempt
                    log_func(
                        f"Attempt {attempt + 1}/{attempts} failed for {func.__name__}: {e}. "
                        f"Retrying in {wait_time:.1f}s..."
                    )
                    (sleep or time.sleep)(wait_time)

            raise RuntimeError(f"Unexpected state in retry logic for {func.__name__}")

        return wrapper
    return decorator
