"""Watching endpoint implementation.

Watching a repository subscribes to its notifications. Unlike starring,
a subscription carries state: it can be ignored instead of deleted.

API Reference: https://docs.github.com/en/rest/activity/watching

"""

from __future__ import annotations

from typing import Any

from ghkit.endpoints.base import BaseEndpoint
from ghkit.models import Repository, Subscription, User
from ghkit.utils.codec import ABSENT
from ghkit.utils.pagination import Paginator
from ghkit.utils.paths import ResourceRef


class ActivityEndpoint(BaseEndpoint):
    """Endpoint for watchers and repository subscriptions.

    Example:
        >>> sub = client.activity.subscription("octocat/Hello-World")
        >>> sub.subscribed
        True

    """

    def watchers(self, repo: ResourceRef, **options: Any) -> Paginator[User]:
        """List the users watching a repository."""
        return self._client.paginate(User, f"{self._repo_path(repo)}/subscribers", **options)

    def watched(self, user: ResourceRef | None = None, **options: Any) -> Paginator[Repository]:
        """List repositories a user (the authenticated user when omitted) watches."""
        return self._client.paginate(
            Repository, f"{self._user_path(user)}/subscriptions", **options
        )

    def subscription(self, repo: ResourceRef) -> Subscription:
        """Get the authenticated user's subscription to a repository.

        Raises:
            NotFoundError: If the user is not watching the repository.

        """
        return self._client.get(f"{self._repo_path(repo)}/subscription", Subscription)

    def update_subscription(
        self,
        repo: ResourceRef,
        subscribed: bool | None = None,
        ignored: bool | None = None,
    ) -> Subscription:
        """Watch a repository, or ignore its notifications with ``ignored=True``."""
        return self._client.put(
            f"{self._repo_path(repo)}/subscription",
            Subscription,
            subscribed=ABSENT if subscribed is None else subscribed,
            ignored=ABSENT if ignored is None else ignored,
        )

    def delete_subscription(self, repo: ResourceRef) -> bool:
        return self._client.boolean_from_response(
            "DELETE", f"{self._repo_path(repo)}/subscription", false_on=()
        )
