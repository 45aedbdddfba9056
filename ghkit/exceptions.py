"""Exception hierarchy and response classification for ghkit.

Every failure the library surfaces is a subclass of ``GitHubError``. HTTP
responses are turned into these types by ``classify()``, so resource modules
never look at raw status codes themselves.

Exception Hierarchy:
    GitHubError (base)
    ├── ConfigurationError       - Invalid client configuration
    ├── TransportError           - Connection, timeout or TLS failure
    ├── InvalidReferenceError    - A resource reference cannot become a path
    ├── DecodeError              - A successful body does not fit its schema
    │   ├── MissingFieldError
    │   └── TypeMismatchError
    └── HTTPError                - Any classified non-2xx response
        ├── ClientError          - 4xx not covered below
        │   ├── InvalidRepositoryError - 404 on a malformed owner/name
        │   ├── NotFoundError          - 404
        │   ├── UnauthorizedError      - 401
        │   ├── ForbiddenError         - 403
        │   ├── RateLimitError         - 403/429 with a rate limit indicator
        │   └── UnprocessableEntityError - 422
        └── ServerError          - 5xx

Example:
    >>> try:
    ...     repo = client.repos.get("octocat/Hello-World")
    ... except NotFoundError:
    ...     print("gone")
    ... except RateLimitError as e:
    ...     print(f"Rate limited until {e.reset_at}")

"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from ghkit.utils.http import ResponseEnvelope


class GitHubError(Exception):
    """Base exception for all ghkit errors.

    Attributes:
        message: Human-readable error description.
        response_data: Parsed response body, if there was one.

    """

    def __init__(
        self,
        message: str,
        response_data: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.response_data = response_data or {}
        super().__init__(message)

    def __repr__(self) -> str:
        """Return a detailed representation for debugging."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(GitHubError):
    """Raised when client configuration is invalid."""


class InvalidReferenceError(GitHubError):
    """Raised when a resource reference cannot be resolved to a path.

    Example:
        >>> resolve_path(User.model_construct(), "users")
        InvalidReferenceError: User has no 'login' or 'id' to build a path from

    """


class TransportError(GitHubError):
    """Raised when no HTTP response was received at all.

    Attributes:
        kind: One of ``"connect"``, ``"timeout"`` or ``"tls"``.
        original_error: The underlying httpx exception.

    """

    KINDS = ("connect", "timeout", "tls")

    def __init__(
        self,
        message: str = "Network error",
        kind: str = "connect",
        original_error: Exception | None = None,
    ) -> None:
        if kind not in self.KINDS:
            raise ValueError(f"Unknown transport error kind: {kind}")
        self.kind = kind
        self.original_error = original_error
        super().__init__(message, response_data=None)

    def __repr__(self) -> str:
        return f"TransportError(kind={self.kind!r}, message={self.message!r})"


class DecodeError(GitHubError):
    """Raised when a successful response body does not match its schema.

    Attributes:
        field: Dotted path of the offending field (``owner.login``,
            ``repositories[2].name``), or empty for the document root.

    """

    def __init__(self, message: str, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(DecodeError):
    """A required field is not present in the wire object."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field '{field}'", field=field)


class TypeMismatchError(DecodeError):
    """A field is present but has the wrong JSON shape."""

    def __init__(self, field: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        where = f"field '{field}'" if field else "document"
        super().__init__(f"Expected {expected} for {where}, got {actual}", field=field)


class HTTPError(GitHubError):
    """Base for errors derived from a non-2xx response.

    Attributes:
        status_code: The HTTP status code of the response.

    """

    def __init__(
        self,
        message: str,
        response_data: dict[str, Any] | None = None,
        status_code: int = 0,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, response_data)


class ClientError(HTTPError):
    """Raised for 4xx responses without a more specific type."""


class NotFoundError(ClientError):
    """Raised when a resource doesn't exist (HTTP 404).

    GitHub also answers 404 for private resources the caller can't see.
    """

    def __init__(
        self,
        message: str = "Not Found",
        response_data: dict[str, Any] | None = None,
        status_code: int = 404,
    ) -> None:
        super().__init__(message, response_data, status_code)


class InvalidRepositoryError(ClientError):
    """Raised for a 404 on a repository path whose owner/name is malformed.

    Attributes:
        repository: The malformed ``owner/name`` as it appeared in the path.

    """

    def __init__(
        self,
        message: str = "Invalid repository",
        response_data: dict[str, Any] | None = None,
        status_code: int = 404,
        repository: str = "",
    ) -> None:
        self.repository = repository
        super().__init__(message, response_data, status_code)


class UnauthorizedError(ClientError):
    """Raised when authentication fails (HTTP 401)."""

    def __init__(
        self,
        message: str = "Bad credentials",
        response_data: dict[str, Any] | None = None,
        status_code: int = 401,
    ) -> None:
        super().__init__(message, response_data, status_code)


class ForbiddenError(ClientError):
    """Raised when the caller lacks permission (HTTP 403)."""

    def __init__(
        self,
        message: str = "Forbidden",
        response_data: dict[str, Any] | None = None,
        status_code: int = 403,
    ) -> None:
        super().__init__(message, response_data, status_code)


class RateLimitError(ClientError):
    """Raised when the API rate limit is exceeded.

    Attributes:
        reset_at: When the limit resets (from ``X-RateLimit-Reset``).
        limit: Maximum requests allowed in the window.
        remaining: Requests remaining, usually 0.
        retry_after: Seconds to wait (from ``Retry-After``), if sent.

    """

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        response_data: dict[str, Any] | None = None,
        status_code: int = 403,
        reset_at: datetime | None = None,
        limit: int | None = None,
        remaining: int | None = None,
        retry_after: int | None = None,
    ) -> None:
        self.reset_at = reset_at
        self.limit = limit
        self.remaining = remaining
        self.retry_after = retry_after
        super().__init__(message, response_data, status_code)

    def seconds_until_reset(self, now: datetime | None = None) -> float | None:
        """Return how long to wait before the limit lifts, if known."""
        if self.retry_after is not None:
            return float(self.retry_after)
        if self.reset_at is None:
            return None
        now = now or datetime.now(timezone.utc)
        return max(0.0, (self.reset_at - now).total_seconds())

    def __str__(self) -> str:
        base = self.message
        if self.reset_at:
            base += f" (resets at {self.reset_at.isoformat()})"
        if self.retry_after:
            base += f" (retry after {self.retry_after}s)"
        return base


@dataclass(frozen=True)
class FieldError:
    """One entry of the ``errors`` array of a 422 response."""

    field: str
    code: str
    resource: str | None = None
    message: str | None = None


class UnprocessableEntityError(ClientError):
    """Raised when the request payload is rejected (HTTP 422).

    Attributes:
        field_errors: Per-field validation errors reported by GitHub.

    """

    def __init__(
        self,
        message: str = "Validation Failed",
        response_data: dict[str, Any] | None = None,
        status_code: int = 422,
        field_errors: list[FieldError] | None = None,
    ) -> None:
        self.field_errors = field_errors or []
        super().__init__(message, response_data, status_code)

    def __str__(self) -> str:
        if not self.field_errors:
            return self.message
        details = ", ".join(f"{e.field}: {e.code}" for e in self.field_errors)
        return f"{self.message} - {details}"


class ServerError(HTTPError):
    """Raised when GitHub returns a server error (HTTP 5xx)."""

    def __init__(
        self,
        message: str = "GitHub server error",
        response_data: dict[str, Any] | None = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message, response_data, status_code)


# =============================================================================
# Classification
# =============================================================================

_REPO_SEGMENT = re.compile(r"^[A-Za-z0-9_.-]+$")
_REPO_PATH = re.compile(r"(?:^|/)repos/([^/]*)(?:/([^/]*))?")
_RATE_LIMIT_WORDS = ("rate limit", "abuse detection")


def classify(envelope: ResponseEnvelope) -> None:
    """Raise the typed error for a non-2xx envelope; return on success.

    Raises:
        HTTPError: The subclass matching the status code and body.

    """
    error = error_from_response(
        envelope.status_code,
        envelope.content,
        envelope.headers,
        path=envelope.url.path if envelope.url is not None else "",
    )
    if error is not None:
        raise error


def error_from_response(
    status_code: int,
    content: bytes | str | None,
    headers: httpx.Headers | dict[str, str] | None = None,
    path: str = "",
) -> HTTPError | None:
    """Map a status code, body and headers to an error, or None for 2xx.

    Malformed bodies never raise here; the status-derived error is returned
    with empty details instead.

    Args:
        status_code: HTTP status code.
        content: Raw response body.
        headers: Response headers (case-insensitive lookups).
        path: Decoded request path, used to detect malformed repositories.

    """
    if 200 <= status_code < 300:
        return None

    headers = httpx.Headers(headers or {})
    data = _parse_error_body(content)
    message = data.get("message")
    if not isinstance(message, str) or not message:
        message = f"HTTP {status_code}"

    if status_code == 404:
        repository = _malformed_repository(path)
        if repository is not None:
            return InvalidRepositoryError(
                f"'{repository}' is not a valid repository name",
                response_data=data,
                repository=repository,
            )
        return NotFoundError(message, response_data=data)

    if status_code == 401:
        return UnauthorizedError(message, response_data=data)

    if status_code == 429 or (status_code == 403 and _is_rate_limited(message, headers)):
        return _rate_limit_error(status_code, message, data, headers)

    if status_code == 403:
        return ForbiddenError(message, response_data=data)

    if status_code == 422:
        return UnprocessableEntityError(
            message,
            response_data=data,
            field_errors=_parse_field_errors(data),
        )

    if 400 <= status_code < 500:
        return ClientError(message, response_data=data, status_code=status_code)

    if 500 <= status_code < 600:
        return ServerError(message, response_data=data, status_code=status_code)

    return HTTPError(f"HTTP {status_code}: {message}", response_data=data, status_code=status_code)


def _parse_error_body(content: bytes | str | None) -> dict[str, Any]:
    if not content:
        return {}
    try:
        body = json.loads(content)
    except (ValueError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def _malformed_repository(path: str) -> str | None:
    """Return the owner/name from a repository path if it is malformed."""
    match = _REPO_PATH.search(path)
    if match is None:
        return None
    owner, name = match.group(1), match.group(2)
    if name is None:
        return owner
    if _REPO_SEGMENT.match(owner) and _REPO_SEGMENT.match(name):
        return None
    return f"{owner}/{name}"


def _is_rate_limited(message: str, headers: httpx.Headers) -> bool:
    lowered = message.lower()
    if any(word in lowered for word in _RATE_LIMIT_WORDS):
        return True
    if headers.get("Retry-After") is not None:
        return True
    return headers.get("X-RateLimit-Remaining") == "0"


def _rate_limit_error(
    status_code: int,
    message: str,
    data: dict[str, Any],
    headers: httpx.Headers,
) -> RateLimitError:
    reset_at = None
    reset = _int_header(headers, "X-RateLimit-Reset")
    if reset is not None:
        reset_at = datetime.fromtimestamp(reset, tz=timezone.utc)

    return RateLimitError(
        message,
        response_data=data,
        status_code=status_code,
        reset_at=reset_at,
        limit=_int_header(headers, "X-RateLimit-Limit"),
        remaining=_int_header(headers, "X-RateLimit-Remaining"),
        retry_after=_int_header(headers, "Retry-After"),
    )


def _int_header(headers: httpx.Headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_field_errors(data: dict[str, Any]) -> list[FieldError]:
    errors = data.get("errors")
    if not isinstance(errors, list):
        return []

    parsed: list[FieldError] = []
    for entry in errors:
        if not isinstance(entry, dict):
            continue
        parsed.append(
            FieldError(
                field=str(entry.get("field", "")),
                code=str(entry.get("code", "")),
                resource=entry.get("resource"),
                message=entry.get("message"),
            )
        )
    return parsed
