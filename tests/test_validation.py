import pytest

from pwned_range.errors import ConfigError, DigestLengthError, LongDigestError, ShortDigestError
from pwned_range.validation import (
    is_supported_url,
    validate_digest_length,
    validate_runtime_constraints,
    validate_url_template,
)


def test_is_supported_url() -> None:
    assert is_supported_url("https://api.pwnedpasswords.com/range/ABCDE") is True
    assert is_supported_url("ftp://example.com/range/ABCDE") is False
    assert is_supported_url("/range/ABCDE") is False


def test_validate_digest_length() -> None:
    validate_digest_length(20, 20)
    with pytest.raises(ShortDigestError):
        validate_digest_length(19, 20)
    with pytest.raises(LongDigestError) as excinfo:
        validate_digest_length(21, 20)
    assert isinstance(excinfo.value, DigestLengthError)
    assert (excinfo.value.expected, excinfo.value.actual) == (20, 21)


@pytest.mark.parametrize(
    "template",
    [
        "https://api.pwnedpasswords.com/range/{prefix}",
        "https://api.pwnedpasswords.com/range/{prefix}?mode=ntlm",
        "http://localhost:9000/{prefix}.txt",
    ],
)
def test_validate_url_template_accepts(template: str) -> None:
    validate_url_template(template)


@pytest.mark.parametrize(
    "template",
    [
        "https://example.com/range/",
        "https://example.com/{prefix}/{prefix}",
        "https://example.com/{prefix}/{mode}",
        "https://example.com/{}",
        "https://example.com/{prefix",
        "file:///srv/ranges/{prefix}",
        "{prefix}",
        "https://h/{prefix:d}",
        "https://h/{prefix!r}",
        "https://h/{prefix!s:>8}",
    ],
)
def test_validate_url_template_rejects(template: str) -> None:
    with pytest.raises(ConfigError):
        validate_url_template(template)


def test_validate_runtime_constraints_rejects_timeout_and_retries() -> None:
    template = "https://example.com/{prefix}"
    with pytest.raises(ConfigError):
        validate_runtime_constraints(
            url_template=template, digest_size=20, timeout=-1.0, max_retries=0
        )
    with pytest.raises(ConfigError):
        validate_runtime_constraints(
            url_template=template, digest_size=20, timeout=1.0, max_retries=-2
        )
