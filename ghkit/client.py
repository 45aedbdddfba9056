"""The GitHub API client facade.

``GitHubClient`` composes the dispatcher, the error classifier, the codec
and the paginator into the verb primitives every endpoint group builds on:

    get / post / put / patch / delete   -> one decoded value
    paginate                            -> lazy sequence across pages
    boolean_from_response               -> True / False for state checks

Example:
    >>> with GitHubClient(token="ghp_xxx") as client:
    ...     repo = client.repos.get("octocat/Hello-World")
    ...     for event in client.events.repository_events(repo):
    ...         print(event.type)

"""

from __future__ import annotations

import logging
import time
from collections.abc import Collection, Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from ghkit.auth import AuthStrategy, create_auth
from ghkit.config import ClientConfig
from ghkit.endpoints import (
    ActivityEndpoint,
    DiscussionsEndpoint,
    EventsEndpoint,
    MigrationsEndpoint,
    ReposEndpoint,
    UsersEndpoint,
)
from ghkit.exceptions import RateLimitError, classify
from ghkit.utils.codec import ABSENT, decode, encode, schema_for
from ghkit.utils.http import HTTPClient, RequestSpec, ResponseEnvelope, parse_body
from ghkit.utils.pagination import Paginator

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class GitHubClient:
    """Typed client for the GitHub REST API (v3).

    Args:
        token: Access token; shorthand for ``auth=TokenAuth(token)``.
        login: Login for basic authentication (with ``password``).
        password: Password for basic authentication.
        config: A complete configuration; other overrides are applied on top.
        transport: Custom httpx transport, e.g. ``httpx.MockTransport`` in tests.
        **overrides: Any other ``ClientConfig`` field.

    Attributes:
        config: The read-only configuration shared by every request.
        repos: Repository, deploy key, collaborator and hook operations.
        users: User operations.
        events: Event timelines.
        migrations: Organization and user migrations.
        discussions: Team discussion comments.
        activity: Watching and subscriptions.

    """

    def __init__(
        self,
        token: str | None = None,
        *,
        login: str | None = None,
        password: str | None = None,
        config: ClientConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        **overrides: Any,
    ) -> None:
        if token or (login and password):
            overrides["auth"] = create_auth(token=token, login=login, password=password)

        if config is None:
            config = ClientConfig(**overrides)
        elif overrides:
            config = config.with_overrides(**overrides)

        self.config = config
        self._transport = transport
        self._http = HTTPClient(config, transport=transport)

        self.repos = ReposEndpoint(self)
        self.users = UsersEndpoint(self)
        self.events = EventsEndpoint(self)
        self.migrations = MigrationsEndpoint(self)
        self.discussions = DiscussionsEndpoint(self)
        self.activity = ActivityEndpoint(self)

    def with_auth(self, auth: AuthStrategy) -> GitHubClient:
        """Return a new client identical to this one but with other credentials.

        The derived client opens its own ``httpx.Client``. Closing it leaves
        this client open, and closing this client leaves it open, so the
        caller closes it, most simply by using it as a context manager.

        Example:
            >>> with client.with_auth(NoAuth()) as anonymous:
            ...     anonymous.users.get("octocat")

        """
        return GitHubClient(config=self.config.with_overrides(auth=auth), transport=self._transport)

    # =========================================================================
    # Verb primitives
    # =========================================================================

    def get(
        self,
        path: str,
        model: type[T] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Any:
        """GET ``path``; ``options`` become query parameters."""
        return self.request("GET", path, model, query=options, headers=headers)

    def delete(
        self,
        path: str,
        model: type[T] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Any:
        """DELETE ``path``; ``options`` become query parameters."""
        return self.request("DELETE", path, model, query=options, headers=headers)

    def post(
        self,
        path: str,
        model: type[T] | None = None,
        *,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Any:
        """POST ``path``; ``data`` and ``options`` are merged into the JSON body."""
        return self.request("POST", path, model, body=_merge_body(data, options), headers=headers)

    def put(
        self,
        path: str,
        model: type[T] | None = None,
        *,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Any:
        """PUT ``path``; ``data`` and ``options`` are merged into the JSON body."""
        return self.request("PUT", path, model, body=_merge_body(data, options), headers=headers)

    def patch(
        self,
        path: str,
        model: type[T] | None = None,
        *,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Any:
        """PATCH ``path``; ``data`` and ``options`` are merged into the JSON body."""
        return self.request("PATCH", path, model, body=_merge_body(data, options), headers=headers)

    def request(
        self,
        method: str,
        path: str,
        model: type[T] | None = None,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send one request, raise on error and decode the body.

        Args:
            method: HTTP verb.
            path: Path relative to the base URL.
            model: Model to decode the body into; without one the parsed
                JSON is returned as-is (None for an empty body).
            query: Query parameters.
            body: JSON body (model or JSON-like value).
            headers: Extra headers.

        Raises:
            HTTPError: For any non-2xx response.
            DecodeError: If a 2xx body does not match ``model``.
            TransportError: If no response was received.

        """
        spec = RequestSpec.build(method, path, query=query, body=body, headers=headers)
        envelope = self.execute(spec)
        tree = parse_body(envelope)
        if model is None:
            return tree
        return decode(schema_for(model), tree)

    def paginate(
        self,
        model: type[T],
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        **options: Any,
    ) -> Paginator[T]:
        """Lazily iterate over every item of a collection, across pages.

        ``options`` become query parameters of the first request. Unless a
        ``per_page`` option is given, the configured page size is used.
        """
        spec = RequestSpec.build("GET", path, query=options, headers=headers)
        return Paginator(self.execute, spec, schema_for(model), per_page=self.config.per_page)

    def boolean_from_response(
        self,
        method: str,
        path: str,
        *,
        false_on: Collection[int] = (404,),
        **options: Any,
    ) -> bool:
        """Return True for a 2xx response and False for a ``false_on`` status.

        Any other status raises its classified error.
        """
        method = method.upper()
        if method in ("GET", "DELETE"):
            spec = RequestSpec.build(method, path, query=options)
        else:
            spec = RequestSpec.build(method, path, body=_merge_body(None, options))

        envelope = self.execute(spec, allowed=false_on)
        return envelope.ok

    def execute(self, spec: RequestSpec, allowed: Collection[int] = ()) -> ResponseEnvelope:
        """Send a spec and classify its response.

        Statuses listed in ``allowed`` are returned instead of raised.
        Rate-limited requests are retried only when the configuration asks
        for it and the wait is short enough.
        """
        attempt = 0
        while True:
            envelope = self._http.send(spec)
            if envelope.status_code in allowed:
                return envelope
            try:
                classify(envelope)
            except RateLimitError as exc:
                wait = self._rate_limit_wait(exc, attempt)
                if wait is None:
                    raise
                attempt += 1
                logger.warning(
                    "Rate limited on %s %s; retrying in %.1fs (attempt %d/%d)",
                    spec.method,
                    spec.path,
                    wait,
                    attempt,
                    self.config.max_retries,
                )
                time.sleep(wait)
                continue
            return envelope

    def _rate_limit_wait(self, error: RateLimitError, attempt: int) -> float | None:
        if not self.config.retry_on_rate_limit or attempt >= self.config.max_retries:
            return None
        wait = error.seconds_until_reset()
        if wait is None or wait > self.config.max_rate_limit_wait:
            return None
        return wait

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GitHubClient(base_url={self.config.base_url!r}, auth={self.config.auth!r})"


def _merge_body(data: Any, options: Mapping[str, Any]) -> Any:
    """Combine an explicit body with keyword options; None means no body."""
    extra = {key: value for key, value in options.items() if value is not ABSENT}
    if data is None:
        return extra or None
    if not extra:
        return data
    base = encode(data)
    if not isinstance(base, dict):
        raise TypeError("Keyword options can only be merged into an object body")
    return {**base, **encode(extra)}
