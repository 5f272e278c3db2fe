"""
Custom Exceptions

This module defines the error taxonomy of the shortener.

- InvalidURLError: client input error, reported as 400
- GenerationExhaustedError: every candidate code collided, reported as 500
- StoreUnavailableError: the backing database could not be reached or
  failed mid-operation, reported as 500 and never retried

A duplicate candidate is not an exception; the mapping store reports it
as InsertResult.DUPLICATE and the shortening service retries.
"""

from typing import Optional


INVALID_URL_MESSAGE = "URL must start with http:// or https://"


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails."""

    def __init__(self, url: str, reason: str = INVALID_URL_MESSAGE):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class GenerationExhaustedError(URLShortenerException):
    """Raised when no unused short code was found within the attempt budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"No unique short code after {attempts} attempts")


class StoreUnavailableError(URLShortenerException):
    """Raised when the mapping store cannot complete an operation."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
