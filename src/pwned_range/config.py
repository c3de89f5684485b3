"""Runtime configuration model."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError
from .validation import validate_runtime_constraints

DEFAULT_URL_TEMPLATE = "https://api.pwnedpasswords.com/range/{prefix}"
NTLM_URL_TEMPLATE = "https://api.pwnedpasswords.com/range/{prefix}?mode=ntlm"
DEFAULT_USER_AGENT = "pwned-range/1.0"
DEFAULT_REQUEST_TIMEOUT = 15.0
SHA1_DIGEST_SIZE = 20
NTLM_DIGEST_SIZE = 16

ENV_PREFIX = "PWNED_RANGE_"
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class FinderConfig:
    """Validated configuration used by the lookup engine and its default transport."""

    url_template: str = DEFAULT_URL_TEMPLATE
    digest_size: int = SHA1_DIGEST_SIZE
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    add_padding: bool = False
    max_retries: int = 0

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            url_template=self.url_template,
            digest_size=self.digest_size,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}.")


def load_config_from_env(environ: Mapping[str, str] | None = None) -> FinderConfig:
    """Build a FinderConfig from ``PWNED_RANGE_*`` environment variables."""
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}

    template = env.get(f"{ENV_PREFIX}URL_TEMPLATE")
    if template:
        overrides["url_template"] = template
    user_agent = env.get(f"{ENV_PREFIX}USER_AGENT")
    if user_agent:
        overrides["user_agent"] = user_agent

    timeout = env.get(f"{ENV_PREFIX}TIMEOUT")
    if timeout:
        try:
            overrides["timeout"] = float(timeout)
        except ValueError as exc:
            raise ConfigError(f"{ENV_PREFIX}TIMEOUT must be a number, got {timeout!r}.") from exc

    retries = env.get(f"{ENV_PREFIX}MAX_RETRIES")
    if retries:
        try:
            overrides["max_retries"] = int(retries)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_PREFIX}MAX_RETRIES must be an integer, got {retries!r}."
            ) from exc

    padding = env.get(f"{ENV_PREFIX}ADD_PADDING")
    if padding is not None:
        overrides["add_padding"] = _parse_bool(f"{ENV_PREFIX}ADD_PADDING", padding)

    return FinderConfig(**overrides)  # type: ignore[arg-type]
