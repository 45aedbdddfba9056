"""Client settings for ghkit.

Each setting is resolved once, when the config is built: an explicit
argument wins, then the matching ``GITHUB_*`` environment variable (a
``.env`` file is loaded at import), then the built-in default.

Environment Variables:
    GITHUB_TOKEN: Access token; takes priority over login/password
    GITHUB_LOGIN / GITHUB_PASSWORD: Basic authentication
    GITHUB_BASE_URL: API root, e.g. a GitHub Enterprise ``/api/v3`` URL
    GITHUB_TIMEOUT: Per-request timeout in seconds
    GITHUB_PER_PAGE: Page size sent with collection requests (1-100)
    GITHUB_RETRY_ON_RATE_LIMIT: ``true`` to sleep through short rate-limit waits

Example:
    >>> config = ClientConfig(per_page=100)
    >>> anonymous = config.with_overrides(auth=NoAuth())

"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import ClassVar, TypeVar

from dotenv import load_dotenv

from ghkit.auth import AuthStrategy, create_auth
from ghkit.exceptions import ConfigurationError

V = TypeVar("V")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_local_env = Path.cwd() / ".env"
load_dotenv(_local_env if _local_env.exists() else None)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Read-only settings shared by every request of a client.

    Nothing mutates a config after construction, so one client can be used
    from several threads. Derive variants with ``with_overrides``.

    Attributes:
        base_url: API root without a trailing slash.
        auth: Strategy that sets the ``Authorization`` header.
        timeout: Per-request timeout in seconds.
        per_page: Page size added to collection requests that set none.
        accept: Versioned media type for the ``Accept`` header.
        user_agent: Value of the ``User-Agent`` header.
        retry_on_rate_limit: Wait for a rate-limit reset and resend.
        max_retries: Resends allowed per request after rate limiting.
        max_rate_limit_wait: Waits longer than this (seconds) are never slept.

    """

    API_ROOT: ClassVar[str] = "https://api.github.com"
    V3_MEDIA_TYPE: ClassVar[str] = "application/vnd.github.v3+json"
    PAGE_SIZE_LIMIT: ClassVar[int] = 100

    base_url: str = field(
        default_factory=lambda: _env("GITHUB_BASE_URL", str, ClientConfig.API_ROOT)
    )
    auth: AuthStrategy = field(default_factory=lambda: _auth_from_env())
    timeout: float = field(default_factory=lambda: _env("GITHUB_TIMEOUT", float, 30.0))
    per_page: int = field(default_factory=lambda: _env("GITHUB_PER_PAGE", int, 30))
    accept: str = V3_MEDIA_TYPE
    user_agent: str = "ghkit/0.1"
    retry_on_rate_limit: bool = field(
        default_factory=lambda: _env("GITHUB_RETRY_ON_RATE_LIMIT", _flag, False)
    )
    max_retries: int = 1
    max_rate_limit_wait: float = 60.0

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if not isinstance(self.auth, AuthStrategy):
            raise ConfigurationError(f"auth must be an AuthStrategy, got {self.auth!r}")
        if not self.accept:
            raise ConfigurationError("accept cannot be empty")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if not 1 <= self.per_page <= self.PAGE_SIZE_LIMIT:
            raise ConfigurationError(
                f"per_page must be in 1..{self.PAGE_SIZE_LIMIT}, got {self.per_page}"
            )

        for name in ("max_retries", "max_rate_limit_wait"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} cannot be negative, got {getattr(self, name)}")

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated

    def with_overrides(self, **kwargs: object) -> ClientConfig:
        """Return a copy with some settings replaced; the copy is re-validated.

        Example:
            >>> ci = ClientConfig(auth=TokenAuth("ghp_xxx")).with_overrides(timeout=5.0)

        Raises:
            ConfigurationError: For an unknown setting or an invalid value.

        """
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        unknown = sorted(set(kwargs) - set(values))
        if unknown:
            raise ConfigurationError(f"Unknown configuration option(s): {', '.join(unknown)}")
        values.update(kwargs)
        return ClientConfig(**values)  # type: ignore[arg-type]


def _env(key: str, cast: Callable[[str], V], default: V) -> V:
    """Read ``key`` from the environment; unset or empty means ``default``."""
    raw = os.environ.get(key, "")
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {key}: {raw!r}") from e


def _flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


def _auth_from_env() -> AuthStrategy:
    return create_auth(
        token=_env("GITHUB_TOKEN", str, None),
        login=_env("GITHUB_LOGIN", str, None),
        password=_env("GITHUB_PASSWORD", str, None),
    )
