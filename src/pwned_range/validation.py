"""Validation and runtime guardrails."""

from __future__ import annotations

from string import Formatter
from urllib.parse import urlparse

from .errors import ConfigError, LongDigestError, ShortDigestError

TEMPLATE_FIELD = "prefix"


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_digest_length(actual: int, expected: int) -> None:
    """Raise ShortDigestError/LongDigestError when sizes differ."""
    if actual < expected:
        raise ShortDigestError(
            f"digest is {actual} bytes, expected {expected}", expected=expected, actual=actual
        )
    if actual > expected:
        raise LongDigestError(
            f"digest is {actual} bytes, expected {expected}", expected=expected, actual=actual
        )


def validate_url_template(template: str) -> None:
    """Require exactly one plain ``{prefix}`` field in an absolute HTTP(S) template."""
    try:
        fields = [
            (name, spec, conversion)
            for _, name, spec, conversion in Formatter().parse(template)
            if name is not None
        ]
    except ValueError as exc:
        raise ConfigError(f"url_template is not a valid format string: {exc}") from exc
    names = [name for name, _, _ in fields]
    if names != [TEMPLATE_FIELD]:
        raise ConfigError(
            f"url_template must contain exactly one {{{TEMPLATE_FIELD}}} field, got {names!r}."
        )
    _, spec, conversion = fields[0]
    if spec or conversion is not None:
        raise ConfigError(
            f"url_template field {{{TEMPLATE_FIELD}}} takes no conversion or format spec."
        )
    if not is_supported_url(template.replace("{" + TEMPLATE_FIELD + "}", "00000")):
        raise ConfigError("url_template must be an absolute http(s) URL.")


def validate_runtime_constraints(
    *,
    url_template: str,
    digest_size: int,
    timeout: float,
    max_retries: int,
) -> None:
    """Validate runtime configuration and raise ConfigError on invalid values."""
    validate_url_template(url_template)
    if digest_size < 3:
        raise ConfigError("digest_size must be >= 3.")
    if timeout <= 0:
        raise ConfigError("timeout must be > 0.")
    if max_retries < 0:
        raise ConfigError("max_retries must be >= 0.")
