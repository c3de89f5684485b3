"""Custom exceptions for range lookups."""

from __future__ import annotations

PARSE_ERROR_PREFIX = "problem parsing results"


class PwnedRangeError(Exception):
    """Base exception for this project."""


class ConfigError(PwnedRangeError):
    """Raised when runtime configuration is invalid."""


class DigestLengthError(PwnedRangeError):
    """Raised when a digest does not match the configured size."""

    def __init__(self, message: str, *, expected: int, actual: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ShortDigestError(DigestLengthError):
    """Raised when a digest is shorter than the configured size."""


class LongDigestError(DigestLengthError):
    """Raised when a digest is longer than the configured size."""


class FetchError(PwnedRangeError):
    """Raised when the remote endpoint answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ParseError(PwnedRangeError):
    """Raised when a matched candidate line cannot be parsed."""

    def __init__(self, message: str, *, line: str) -> None:
        super().__init__(f"{PARSE_ERROR_PREFIX}: {message}: {line!r}")
        self.line = line


class MalformedLineError(ParseError):
    """Raised when a candidate line does not have exactly two fields."""


class CountParseError(ParseError):
    """Raised when the count field is not a base-10 integer in range."""
