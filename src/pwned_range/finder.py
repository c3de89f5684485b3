"""k-anonymity lookups against a Pwned Passwords style range endpoint.

Only the first five hex digits of a digest ever leave the process. The
endpoint answers with every ``SUFFIX:COUNT`` record sharing that prefix and
the suffix is matched locally.
"""

from __future__ import annotations

import hashlib
import io
import logging
import re
from collections.abc import Iterable, Iterator

from requests import Session

from .config import SHA1_DIGEST_SIZE, FinderConfig
from .errors import ConfigError, CountParseError, MalformedLineError
from .fetchers import RequestsFetcher, make_session
from .logging_utils import get_logger
from .models import Fetcher, RangeQuery
from .validation import validate_digest_length

PREFIX_SIZE = 5
FIELD_DELIMITER = ":"
MAX_COUNT = 2**63 - 1

_COUNT_RE = re.compile(r"[0-9]+")

BytesLike = bytes | bytearray | memoryview


def sha1_digest(password: str) -> bytes:
    """Return the raw SHA-1 digest of a UTF-8 encoded password."""
    return hashlib.sha1(password.encode("utf-8")).digest()  # nosec B324


def split_digest(digest: BytesLike, digest_size: int = SHA1_DIGEST_SIZE) -> RangeQuery:
    """Validate a digest and split its uppercase hex form into prefix and suffix."""
    raw = memoryview(digest).tobytes()
    validate_digest_length(len(raw), digest_size)
    full = raw.hex().upper()
    return RangeQuery(prefix=full[:PREFIX_SIZE], suffix=full[PREFIX_SIZE:])


def iter_lines(body: str) -> Iterator[str]:
    """Yield lines of a response body lazily, without their terminators."""
    for line in io.StringIO(body):
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def find_suffix(suffix: str, lines: Iterable[str]) -> str | None:
    """Return the first line that starts with ``suffix``, or None."""
    for line in lines:
        if line.startswith(suffix):
            return line
    return None


def parse_count(line: str) -> int:
    """Parse the count out of a ``SUFFIX:COUNT`` line."""
    parts = line.split(FIELD_DELIMITER)
    if len(parts) != 2:
        raise MalformedLineError(f"expected 2 fields, got {len(parts)}", line=line)
    field = parts[1]
    if not _COUNT_RE.fullmatch(field):
        raise CountParseError("count is not a base-10 integer", line=line)
    count = int(field)
    if count > MAX_COUNT:
        raise CountParseError("count is out of range", line=line)
    return count


class Finder:
    """Looks up how often a digest has been seen in reported breaches.

    The finder keeps no state between calls. Every lookup performs exactly
    one ``fetch_range`` call on the injected fetcher and never retries,
    caches or wraps the fetcher's exceptions.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        config: FinderConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._config = config or FinderConfig()
        self._logger = logger or get_logger()

    @property
    def config(self) -> FinderConfig:
        return self._config

    def find(self, digest: BytesLike) -> int:
        """Return the breach count for a raw digest.

        Zero means no record was found. Raises ShortDigestError or
        LongDigestError before any network activity, ParseError when the
        matched line is malformed, and whatever the fetcher raises.
        """
        query = split_digest(digest, self._config.digest_size)
        body = self._fetcher.fetch_range(query.prefix)
        line = find_suffix(query.suffix, iter_lines(body))
        if line is None:
            self._logger.debug("No record in range %s", query.prefix)
            return 0
        count = parse_count(line)
        self._logger.debug("Record found in range %s", query.prefix)
        return count

    def find_password(self, password: str) -> int:
        """SHA-1 a password and return its breach count."""
        if self._config.digest_size != SHA1_DIGEST_SIZE:
            raise ConfigError(
                f"find_password needs a {SHA1_DIGEST_SIZE}-byte digest size, "
                f"configured for {self._config.digest_size}."
            )
        return self.find(sha1_digest(password))

    def close(self) -> None:
        close_fn = getattr(self._fetcher, "close", None)
        if callable(close_fn):
            close_fn()

    def __enter__(self) -> Finder:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()


def build_finder(
    config: FinderConfig | None = None,
    *,
    session: Session | None = None,
    logger: logging.Logger | None = None,
) -> Finder:
    """Create a Finder backed by the default requests transport.

    ``session`` replaces the default client, e.g. to set TLS, proxies or
    adapters. A caller-supplied session is never modified or closed by the
    finder; the padding header is sent per request instead.
    """
    config = config or FinderConfig()
    logger = logger or get_logger()
    headers: dict[str, str] = {}
    owns_session = session is None
    if session is None:
        session = make_session(
            config.user_agent, add_padding=config.add_padding, max_retries=config.max_retries
        )
    elif config.add_padding:
        headers["Add-Padding"] = "true"
    fetcher = RequestsFetcher(
        session=session,
        url_template=config.url_template,
        timeout=config.timeout,
        logger=logger,
        headers=headers,
        owns_session=owns_session,
    )
    return Finder(fetcher, config=config, logger=logger)
