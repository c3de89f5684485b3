"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class Fetcher(Protocol):
    """Contract for candidate-set transports."""

    def fetch_range(self, prefix: str) -> str:
        """Return the raw candidate list for a hash prefix or raise."""


@dataclass(frozen=True)
class RangeQuery:
    """A digest split into the public prefix and the private suffix."""

    prefix: str
    suffix: str

    def __repr__(self) -> str:
        return f"RangeQuery(prefix={self.prefix!r}, suffix=<{len(self.suffix)} chars>)"
