"""Pagination over GitHub's Link header.

A collection request returns one page plus a ``Link`` header pointing at
the next one. ``Paginator`` walks those links lazily:

    - nothing is requested until the first item is pulled
    - each pull issues at most one request, never reading ahead
    - the ``rel="next"`` URL is requested verbatim
    - the sequence ends when a page has no ``rel="next"`` link
    - abandoning the iterator never triggers another request

GitHub Link Header Format:
    Link: <url>; rel="next", <url>; rel="last", <url>; rel="first", <url>; rel="prev"

"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ghkit.exceptions import TypeMismatchError
from ghkit.utils.codec import Schema, decode, json_type_name
from ghkit.utils.http import RequestSpec, ResponseEnvelope, parse_body

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Matches: <url>; rel="relation"
LINK_PATTERN = re.compile(r'<([^>]+)>\s*;\s*rel="([^"]+)"')


@dataclass
class LinkInfo:
    """Parsed pagination links from GitHub's Link header."""

    next_url: str | None = None
    prev_url: str | None = None
    first_url: str | None = None
    last_url: str | None = None

    @property
    def has_next(self) -> bool:
        return self.next_url is not None


def parse_link_header(link_header: str | None) -> LinkInfo:
    """Parse GitHub's Link header into structured data.

    Entries that don't look like ``<url>; rel="name"`` are skipped, so a
    malformed header simply yields no links.

    Example:
        >>> header = '<https://api.github.com/repos?page=2>; rel="next"'
        >>> parse_link_header(header).next_url
        'https://api.github.com/repos?page=2'

    """
    links = LinkInfo()
    if not link_header:
        return links

    for match in LINK_PATTERN.finditer(link_header):
        url, rels = match.groups()
        # rel may hold several space-separated relation names
        for rel in rels.split():
            if rel == "next":
                links.next_url = url
            elif rel == "prev":
                links.prev_url = url
            elif rel == "first":
                links.first_url = url
            elif rel == "last":
                links.last_url = url

    return links


class Paginator(Iterator[T], Generic[T]):
    """Lazy, forward-only sequence of decoded items across pages.

    Args:
        fetch: Sends a request and returns a classified (2xx) envelope.
        first: Request for the first page.
        schema: Schema each array element is decoded with.
        per_page: Page size added to the first request unless it already
            carries a ``per_page`` parameter.

    Attributes:
        requests_sent: Number of pages requested so far.

    """

    def __init__(
        self,
        fetch: Callable[[RequestSpec], ResponseEnvelope],
        first: RequestSpec,
        schema: Schema,
        per_page: int | None = None,
    ) -> None:
        if per_page is not None and not first.has_query("per_page"):
            first = first.with_query("per_page", per_page)
        self._fetch = fetch
        self._schema = schema
        self._pending: RequestSpec | None = first
        self._buffer: list[Any] = []
        self._index = 0
        self._closed = False
        self.requests_sent = 0

    def __iter__(self) -> Paginator[T]:
        return self

    def __next__(self) -> T:
        while self._index >= len(self._buffer):
            if self._closed or self._pending is None:
                raise StopIteration
            self._load_page(self._pending)

        item = self._buffer[self._index]
        self._index += 1
        return item  # type: ignore[no-any-return]

    def close(self) -> None:
        """Stop the sequence; no further requests will be made."""
        self._closed = True
        self._pending = None
        self._buffer = []
        self._index = 0

    def _load_page(self, spec: RequestSpec) -> None:
        # Clear the pending request first: a failing page ends the sequence
        self._pending = None
        self.requests_sent += 1
        page_number = self.requests_sent
        envelope = self._fetch(spec)

        body = parse_body(envelope)
        if not isinstance(body, list):
            raise TypeMismatchError(f"<page {page_number}>", "array", json_type_name(body))

        items = [decode(self._schema, item, f"[{i}]") for i, item in enumerate(body)]

        links = parse_link_header(envelope.link_header)
        if links.next_url:
            self._pending = RequestSpec(method="GET", path=links.next_url, headers=spec.headers)

        logger.debug(
            "Fetched page %d of %s (%d items, next=%s)",
            page_number,
            self._schema.type_id,
            len(items),
            links.has_next,
        )
        self._buffer = items
        self._index = 0


def collect_all(pages: Iterator[T], max_items: int | None = None) -> list[T]:
    """Drain a paginator into a list.

    Warning: this loads everything into memory.

    Args:
        pages: A ``Paginator`` (or any iterator).
        max_items: Stop after this many items; later pages are not fetched.

    """
    all_items: list[T] = []

    for item in pages:
        all_items.append(item)
        if max_items and len(all_items) >= max_items:
            break

    return all_items
