"""Request dispatching over httpx.

``HTTPClient.send()`` turns one ``RequestSpec`` into one HTTP exchange and
returns the raw ``ResponseEnvelope``, whatever its status. Only failures to
get a response at all (DNS, refused connection, timeout, TLS) raise, as
``TransportError``. Classifying statuses is left to ``ghkit.exceptions``.

"""

from __future__ import annotations

import json
import logging
import ssl
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from ghkit.config import ClientConfig
from ghkit.exceptions import DecodeError, TransportError
from ghkit.utils.codec import ABSENT, encode

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True)
class RequestSpec:
    """Everything needed to issue one request.

    Attributes:
        method: HTTP verb.
        path: Path relative to the base URL, or an absolute URL (used as-is).
        query: Query parameters in insertion order; keys are unique.
        body: Model or JSON-like value sent as the JSON body.
        headers: Extra headers, overriding the defaults.

    """

    method: str
    path: str
    query: tuple[tuple[str, Any], ...] = ()
    body: Any = None
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> RequestSpec:
        """Build a spec, dropping query parameters that are None or ABSENT."""
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        params = tuple(
            (key, value)
            for key, value in (query or {}).items()
            if value is not None and value is not ABSENT
        )
        return cls(
            method=method,
            path=path,
            query=params,
            body=body,
            headers=tuple((headers or {}).items()),
        )

    def has_query(self, key: str) -> bool:
        return any(name == key for name, _ in self.query)

    def with_query(self, key: str, value: Any) -> RequestSpec:
        """Return a copy with one more query parameter appended."""
        return RequestSpec(
            method=self.method,
            path=self.path,
            query=(*self.query, (key, value)),
            body=self.body,
            headers=self.headers,
        )


@dataclass(frozen=True)
class ResponseEnvelope:
    """Raw status, headers and body of one response."""

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes = b""
    url: httpx.URL | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def link_header(self) -> str | None:
        return self.headers.get("Link")

    def json(self) -> Any:
        """Parse the body as JSON; an empty body is None."""
        if not self.content.strip():
            return None
        return json.loads(self.content)


class HTTPClient:
    """Sends requests built from a ``RequestSpec``.

    The underlying ``httpx.Client`` only pools connections. Nothing about a
    request or response is kept between calls.

    Attributes:
        config: The client configuration in use.

    """

    __slots__ = ("_client", "config")

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.Client(
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
            follow_redirects=False,
        )

    def send(self, spec: RequestSpec) -> ResponseEnvelope:
        """Execute one request and return its envelope.

        Raises:
            TransportError: If no response could be received.

        """
        request = self.build_request(spec)
        logger.debug("%s %s", request.method, request.url)

        try:
            response = self._client.send(request)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", request.method, request.url)
            raise TransportError(f"Request timed out: {exc}", "timeout", exc) from exc
        except httpx.TransportError as exc:
            kind = "tls" if _is_tls_failure(exc) else "connect"
            logger.warning("%s %s failed (%s): %s", request.method, request.url, kind, exc)
            raise TransportError(f"Connection failed: {exc}", kind, exc) from exc

        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return ResponseEnvelope(
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
            url=request.url,
        )

    def build_request(self, spec: RequestSpec) -> httpx.Request:
        """Build the httpx request for a spec, with auth and default headers."""
        headers = {
            "Accept": self.config.accept,
            "User-Agent": self.config.user_agent,
        }
        content = None
        if spec.body is not None:
            content = json.dumps(encode(spec.body)).encode()
            headers["Content-Type"] = "application/json"
        headers.update(spec.headers)

        request = self._client.build_request(
            spec.method,
            self.url_for(spec.path),
            params=list(spec.query) or None,
            content=content,
            headers=headers,
        )
        return self.config.auth.apply(request)

    def url_for(self, path: str) -> str:
        """Join a relative path onto the base URL; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def close(self) -> None:
        self._client.close()


def _is_tls_failure(exc: Exception) -> bool:
    cause: BaseException | None = exc
    while cause is not None:
        if isinstance(cause, ssl.SSLError):
            return True
        cause = cause.__cause__ or cause.__context__
    message = str(exc).lower()
    return "ssl" in message or "certificate" in message


def parse_body(envelope: ResponseEnvelope) -> Any:
    """Parse a successful envelope's body as JSON.

    Raises:
        DecodeError: If the body is not valid JSON.

    """
    try:
        return envelope.json()
    except ValueError as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc
