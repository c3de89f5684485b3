"""HTTP transport for range queries."""

from __future__ import annotations

import logging

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import FetchError


def make_session(user_agent: str, *, add_padding: bool = False, max_retries: int = 0) -> Session:
    """Create a requests session with headers and an explicit retry policy.

    ``max_retries`` defaults to zero so one lookup is one request.
    """
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    if add_padding:
        session.headers.update({"Add-Padding": "true"})
    retry = Retry(
        total=max_retries,
        backoff_factor=0.6,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class RequestsFetcher:
    """Requests-based fetcher for the range endpoint.

    ``headers`` are sent with every request on top of the session's own.
    The session is closed by ``close()`` only when ``owns_session`` is set.
    """

    def __init__(
        self,
        *,
        session: Session,
        url_template: str,
        timeout: float,
        logger: logging.Logger,
        headers: dict[str, str] | None = None,
        owns_session: bool = True,
    ) -> None:
        self._session = session
        self._url_template = url_template
        self._timeout = timeout
        self._logger = logger
        self._headers = dict(headers or {})
        self._owns_session = owns_session

    def url_for(self, prefix: str) -> str:
        return self._url_template.format(prefix=prefix)

    def fetch_range(self, prefix: str) -> str:
        url = self.url_for(prefix)
        self._logger.debug("Fetching range %s", prefix)
        if self._headers:
            response = self._session.get(url, timeout=self._timeout, headers=self._headers)
        else:
            response = self._session.get(url, timeout=self._timeout)
        if response.status_code != 200:
            self._logger.debug("Range %s answered %s", prefix, response.status_code)
            status = f"{response.status_code} {response.reason or ''}".rstrip()
            raise FetchError(
                f"range request failed: {status}",
                status_code=response.status_code,
                url=url,
            )
        return str(response.text)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
