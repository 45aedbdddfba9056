"""Authentication strategies for the GitHub API.

Each strategy sets (at most) one ``Authorization`` header on an outgoing
request.

Supported Authentication Methods:
    - NoAuth: Unauthenticated requests (lower rate limits)
    - BasicAuth: Login and password (or login and token)
    - TokenAuth: OAuth / personal access token, ``Authorization: token ...``
    - AppAuth: GitHub App JWT, ``Authorization: Bearer ...``

Example:
    >>> from ghkit.auth import TokenAuth, NoAuth
    >>>
    >>> auth = TokenAuth("ghp_xxxxxxxxxxxx")
    >>> auth = NoAuth()

"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class AuthStrategy(ABC):
    """Abstract base class for authentication strategies."""

    @abstractmethod
    def apply(self, request: httpx.Request) -> httpx.Request:
        """Apply authentication to an outgoing request.

        Args:
            request: The httpx request to authenticate.

        Returns:
            The request with authentication applied.

        """

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if this strategy provides authentication."""


def _mask(secret: str) -> str:
    return f"{secret[:4]}..." if len(secret) > 4 else "***"


class _CredentialAuth(AuthStrategy):
    """A strategy sending ``Authorization: <scheme> <credential>``.

    Two instances are equal when they are the same strategy with the same
    credential.
    """

    __slots__ = ("_credential",)

    scheme = ""

    def __init__(self, credential: str) -> None:
        self._credential = credential

    def apply(self, request: httpx.Request) -> httpx.Request:
        request.headers["Authorization"] = f"{self.scheme} {self._credential}"
        return request

    @property
    def is_authenticated(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _CredentialAuth) or type(other) is not type(self):
            return NotImplemented
        return other._credential == self._credential

    def __hash__(self) -> int:
        return hash((self.scheme, self._credential))


def _required(value: str, what: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{what} cannot be empty")
    return value


class TokenAuth(_CredentialAuth):
    """OAuth or personal access token, sent as ``Authorization: token <value>``.

    Surrounding whitespace (a trailing newline from a secrets file, say) is
    stripped.

    Raises:
        ValueError: If the token is empty or blank.

    """

    __slots__ = ()

    scheme = "token"

    def __init__(self, token: str) -> None:
        super().__init__(_required(token, "Token"))

    def __repr__(self) -> str:
        return f"TokenAuth(token={_mask(self._credential)!r})"


class BasicAuth(_CredentialAuth):
    """HTTP Basic authentication with a login and password (or token)."""

    __slots__ = ("_login",)

    scheme = "Basic"

    def __init__(self, login: str, password: str) -> None:
        if not login:
            raise ValueError("Login cannot be empty")
        if not password:
            raise ValueError("Password cannot be empty")
        self._login = login
        super().__init__(base64.b64encode(f"{login}:{password}".encode()).decode())

    @property
    def login(self) -> str:
        return self._login

    def __repr__(self) -> str:
        return f"BasicAuth(login={self._login!r}, password='***')"


class AppAuth(_CredentialAuth):
    """GitHub App authentication with a pre-signed JWT.

    The JWT is used as-is; minting and refreshing it is left to the caller.
    """

    __slots__ = ()

    scheme = "Bearer"

    def __init__(self, jwt: str) -> None:
        super().__init__(_required(jwt, "JWT"))

    def __repr__(self) -> str:
        return f"AppAuth(jwt={_mask(self._credential)!r})"


class NoAuth(AuthStrategy):
    """No authentication (anonymous requests).

    Unauthenticated requests have lower rate limits (60/hour).
    """

    __slots__ = ()

    def apply(self, request: httpx.Request) -> httpx.Request:
        request.headers.pop("Authorization", None)
        return request

    @property
    def is_authenticated(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoAuth)

    def __hash__(self) -> int:
        return hash("none")

    def __repr__(self) -> str:
        return "NoAuth()"


def create_auth(
    token: str | None = None,
    login: str | None = None,
    password: str | None = None,
) -> AuthStrategy:
    """Factory function to create the appropriate auth strategy.

    A token wins over a login/password pair.

    Example:
        >>> create_auth("ghp_xxx")  # TokenAuth
        >>> create_auth(login="octocat", password="secret")  # BasicAuth
        >>> create_auth()  # NoAuth

    """
    if token:
        return TokenAuth(token)
    if login and password:
        return BasicAuth(login, password)
    return NoAuth()
