"""Helpers for faking GitHub responses with ``httpx.MockTransport``."""

from __future__ import annotations

import json
from typing import Any

import httpx


def json_response(
    status_code: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a canned response with a JSON body (empty when ``body`` is None)."""
    content = b"" if body is None else json.dumps(body).encode()
    return httpx.Response(status_code, content=content, headers=headers)


class Recorder:
    """Mock transport handler replaying canned responses and recording requests.

    ``routes`` maps ``(method, path)`` to a response, or to a list of
    responses served in order. Unknown routes answer 404.
    """

    def __init__(self, routes: dict[tuple[str, str], Any] | None = None) -> None:
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.path))
        if answer is None:
            return json_response(404, {"message": "Not Found"})
        if isinstance(answer, list):
            return answer.pop(0)
        return answer

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)
