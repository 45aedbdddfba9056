"""Users endpoint implementation.

This module provides methods for interacting with GitHub's Users API:
- Get user profiles, or the authenticated user
- Check whether a user exists
- List followers and following

API Reference: https://docs.github.com/en/rest/users

"""

from __future__ import annotations

from typing import Any

from ghkit.endpoints.base import BaseEndpoint
from ghkit.exceptions import NotFoundError
from ghkit.models import User
from ghkit.utils.pagination import Paginator
from ghkit.utils.paths import ResourceRef, path_segment


class UsersEndpoint(BaseEndpoint):
    """Endpoint for user-related API calls.

    Example:
        >>> user = client.users.get("octocat")
        >>> print(user.login, user.public_repos)
        >>>
        >>> me = client.users.get()
        >>> for follower in client.users.followers(me):
        ...     print(follower.login)

    """

    def get(self, user: ResourceRef | None = None) -> User:
        """Get a user's profile.

        Works without authentication for public profiles. Without ``user``
        the authenticated user is returned, which requires credentials.

        Args:
            user: Login, id or ``User``; omit for the authenticated user.

        Raises:
            NotFoundError: If the user doesn't exist.
            UnauthorizedError: If ``user`` is omitted and the client is anonymous.

        """
        return self._client.get(self._user_path(user), User)

    def exists(self, user: ResourceRef) -> bool:
        try:
            self.get(user)
        except NotFoundError:
            return False
        return True

    def list_all(self, since: int | None = None, **options: Any) -> Paginator[User]:
        """List every user, in the order they signed up.

        Args:
            since: Only users with an id greater than this.

        """
        return self._client.paginate(User, "users", since=since, **options)

    def followers(self, user: ResourceRef | None = None, **options: Any) -> Paginator[User]:
        """List a user's followers (the authenticated user's when omitted)."""
        return self._client.paginate(User, f"{self._user_path(user)}/followers", **options)

    def following(self, user: ResourceRef | None = None, **options: Any) -> Paginator[User]:
        """List the users a user follows (the authenticated user's when omitted)."""
        return self._client.paginate(User, f"{self._user_path(user)}/following", **options)

    def follows(self, target: ResourceRef, user: ResourceRef | None = None) -> bool:
        """Check whether ``user`` (or the authenticated user) follows ``target``.

        Example:
            >>> client.users.follows("octocat", user="hubot")
            False

        """
        return self._client.boolean_from_response(
            "GET", f"{self._user_path(user)}/following/{path_segment(target)}"
        )
