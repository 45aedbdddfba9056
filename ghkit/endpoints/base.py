"""Base class for API endpoint groups.

Endpoint groups are thin: they turn arguments into a path, options and a
model type, and hand those to the client's verb primitives.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghkit.models import Repository, User
from ghkit.utils.paths import ResourceRef, path_segment, resolve_path

if TYPE_CHECKING:
    from ghkit.client import GitHubClient


class BaseEndpoint:
    """Base class for API endpoint groups.

    Attributes:
        _client: The client whose verbs this group calls.

    """

    __slots__ = ("_client",)

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    @staticmethod
    def _repo_path(repo: ResourceRef | Repository) -> str:
        """``repos/owner/name`` for a name or model, ``repositories/<id>`` for an id."""
        if isinstance(repo, int) and not isinstance(repo, bool):
            return resolve_path(repo, "repositories")
        return resolve_path(repo, "repos")

    @staticmethod
    def _user_path(user: ResourceRef | User | None = None) -> str:
        """``users/<login>`` for a user, ``user`` for the authenticated user."""
        if user is None:
            return "user"
        return resolve_path(user, "users")

    @staticmethod
    def _full_name(repo: ResourceRef | Repository) -> str:
        return path_segment(repo)
