"""Events endpoint implementation.

Event timelines are read-only and paginated. GitHub keeps at most 300
events (ten pages) per timeline.

API Reference: https://docs.github.com/en/rest/activity/events

"""

from __future__ import annotations

from typing import Any

from ghkit.endpoints.base import BaseEndpoint
from ghkit.models import Event
from ghkit.utils.pagination import Paginator
from ghkit.utils.paths import ResourceRef, resolve_path


class EventsEndpoint(BaseEndpoint):
    """Endpoint for event timelines.

    Example:
        >>> for event in client.events.repository_events("octocat/Hello-World"):
        ...     print(event.type, event.actor.login)

    """

    def public_events(self, **options: Any) -> Paginator[Event]:
        """List public events across GitHub."""
        return self._client.paginate(Event, "events", **options)

    def user_events(self, user: ResourceRef, **options: Any) -> Paginator[Event]:
        """List events performed by a user.

        Private events are included when the client is authenticated as
        that user.
        """
        return self._client.paginate(Event, f"{resolve_path(user, 'users')}/events", **options)

    def user_public_events(self, user: ResourceRef, **options: Any) -> Paginator[Event]:
        return self._client.paginate(
            Event, f"{resolve_path(user, 'users')}/events/public", **options
        )

    def received_events(
        self,
        user: ResourceRef,
        public_only: bool = False,
        **options: Any,
    ) -> Paginator[Event]:
        """List events a user has received by watching repos and following users."""
        path = f"{resolve_path(user, 'users')}/received_events"
        if public_only:
            path += "/public"
        return self._client.paginate(Event, path, **options)

    def repository_events(self, repo: ResourceRef, **options: Any) -> Paginator[Event]:
        return self._client.paginate(Event, f"{self._repo_path(repo)}/events", **options)

    def organization_events(self, organization: ResourceRef, **options: Any) -> Paginator[Event]:
        """List public events of an organization."""
        return self._client.paginate(
            Event, f"{resolve_path(organization, 'orgs')}/events", **options
        )
