"""Repositories endpoint implementation.

This module provides methods for GitHub's Repositories API:
- Get, create, edit, transfer and delete repositories
- Star, watch and fork
- Deploy keys and collaborators
- Pre-receive hooks (GitHub Enterprise)

A repository may be given as ``"owner/name"``, as a numeric id or as a
``Repository`` model.

API Reference: https://docs.github.com/en/rest/repos

"""

from __future__ import annotations

from typing import Any

from ghkit.endpoints.base import BaseEndpoint
from ghkit.exceptions import InvalidRepositoryError, NotFoundError
from ghkit.models import Organization, PreReceiveHook, Repository, RepositoryDeployKey, User
from ghkit.utils.codec import ABSENT
from ghkit.utils.pagination import Paginator
from ghkit.utils.paths import ResourceRef, resolve_path

PRE_RECEIVE_PREVIEW = "application/vnd.github.eye-scream-preview"


class ReposEndpoint(BaseEndpoint):
    """Endpoint for repository-related API calls.

    Example:
        >>> repo = client.repos.get("octocat/Hello-World")
        >>> print(f"{repo.full_name}: {repo.stargazers_count} stars")
        >>>
        >>> for repo in client.repos.list_for_user("torvalds"):
        ...     print(repo.name)

    """

    def exists(self, repo: ResourceRef) -> bool:
        """Check if a repository exists.

        Only "not found" answers become False; any other error is raised.

        Example:
            >>> client.repos.exists("octocat/Hello-World")
            True

        """
        try:
            self.get(repo)
        except (InvalidRepositoryError, NotFoundError):
            return False
        return True

    def get(self, repo: ResourceRef) -> Repository:
        """Get a single repository.

        Raises:
            NotFoundError: If the repository doesn't exist or is private.
            InvalidRepositoryError: If the name is not a valid ``owner/name``.

        """
        return self._client.get(self._repo_path(repo), Repository)

    def edit(self, repo: ResourceRef, **options: Any) -> Repository:
        """Edit a repository.

        The body carries ``name``, defaulting to the repository's own
        name so an edit never renames it by accident. Pass ``name=`` to rename.
        Numeric ids carry no name, so nothing is defaulted for them.

        Example:
            >>> client.repos.edit("octocat/Hello-World", has_wiki=False)

        """
        if not isinstance(repo, int):
            options.setdefault("name", self._full_name(repo).rsplit("/", 1)[-1])
        return self._client.patch(self._repo_path(repo), Repository, **options)

    def set_private(self, repo: ResourceRef) -> Repository:
        """Hide a public repository."""
        return self.edit(repo, private=True)

    def set_public(self, repo: ResourceRef) -> Repository:
        """Unhide a private repository."""
        return self.edit(repo, private=False)

    def list_for_user(
        self,
        user: ResourceRef | None = None,
        **options: Any,
    ) -> Paginator[Repository]:
        """List repositories of a user, or of the authenticated user.

        Note:
            For an organization only its public repositories are listed.

        """
        return self._client.paginate(Repository, f"{self._user_path(user)}/repos", **options)

    def list_all(self, **options: Any) -> Paginator[Repository]:
        """List every public repository, in the order they were created."""
        return self._client.paginate(Repository, "repositories", **options)

    def create(
        self,
        name: str,
        organization: str | Organization | None = None,
        **options: Any,
    ) -> Repository:
        """Create a repository for the authenticated user or an organization."""
        if organization is None:
            path = "user/repos"
        else:
            path = f"{resolve_path(organization, 'orgs')}/repos"
        return self._client.post(path, Repository, name=name, **options)

    def delete(self, repo: ResourceRef) -> bool:
        """Delete a repository. Requires the ``delete_repo`` scope."""
        return self._client.boolean_from_response("DELETE", self._repo_path(repo), false_on=())

    def transfer(
        self,
        repo: ResourceRef,
        new_owner: str,
        team_ids: list[int] | None = None,
    ) -> Repository:
        """Transfer a repository to another user or organization."""
        return self._client.post(
            f"{self._repo_path(repo)}/transfer",
            Repository,
            new_owner=new_owner,
            team_ids=ABSENT if team_ids is None else team_ids,
        )

    def fork(self, repo: ResourceRef, organization: str | None = None) -> Repository:
        """Fork a repository, optionally into an organization."""
        return self._client.post(
            f"{self._repo_path(repo)}/forks",
            Repository,
            organization=ABSENT if organization is None else organization,
        )

    # =========================================================================
    # Starring and watching
    # =========================================================================

    def star(self, repo: ResourceRef) -> bool:
        return self._client.boolean_from_response("PUT", f"user/starred/{self._full_name(repo)}")

    def unstar(self, repo: ResourceRef) -> bool:
        """Unstar a repository; False if it was not starred."""
        return self._client.boolean_from_response("DELETE", f"user/starred/{self._full_name(repo)}")

    def is_starred(self, repo: ResourceRef) -> bool:
        return self._client.boolean_from_response("GET", f"user/starred/{self._full_name(repo)}")

    def watch(self, repo: ResourceRef) -> bool:
        return self._client.boolean_from_response(
            "PUT", f"user/subscriptions/{self._full_name(repo)}"
        )

    def unwatch(self, repo: ResourceRef) -> bool:
        return self._client.boolean_from_response(
            "DELETE", f"user/subscriptions/{self._full_name(repo)}"
        )

    # =========================================================================
    # Deploy keys
    # =========================================================================

    def deploy_keys(self, repo: ResourceRef) -> Paginator[RepositoryDeployKey]:
        """List deploy keys of a repository. Requires authentication."""
        return self._client.paginate(RepositoryDeployKey, f"{self._repo_path(repo)}/keys")

    def deploy_key(self, repo: ResourceRef, key_id: int) -> RepositoryDeployKey:
        return self._client.get(f"{self._repo_path(repo)}/keys/{key_id}", RepositoryDeployKey)

    def add_deploy_key(
        self,
        repo: ResourceRef,
        title: str,
        key: str,
        read_only: bool = False,
    ) -> RepositoryDeployKey:
        """Add a deploy key to a repository.

        Example:
            >>> client.repos.add_deploy_key("octocat/Hello-World", "Staging", "ssh-rsa AAA...")

        """
        return self._client.post(
            f"{self._repo_path(repo)}/keys",
            RepositoryDeployKey,
            title=title,
            key=key,
            read_only=read_only,
        )

    def remove_deploy_key(self, repo: ResourceRef, key_id: int) -> bool:
        return self._client.boolean_from_response(
            "DELETE", f"{self._repo_path(repo)}/keys/{key_id}", false_on=()
        )

    # =========================================================================
    # Collaborators
    # =========================================================================

    def collaborators(self, repo: ResourceRef, affiliation: str = "all") -> Paginator[User]:
        """List collaborators; private repositories require authentication.

        Args:
            repo: The repository.
            affiliation: ``"outside"``, ``"direct"`` or ``"all"``.

        """
        return self._client.paginate(
            User,
            f"{self._repo_path(repo)}/collaborators",
            affiliation=affiliation,
        )

    # =========================================================================
    # Pre-receive hooks
    # =========================================================================

    def pre_receive_hooks(self, repo: ResourceRef) -> Paginator[PreReceiveHook]:
        return self._client.paginate(
            PreReceiveHook,
            f"{self._repo_path(repo)}/pre-receive-hooks",
            headers={"Accept": PRE_RECEIVE_PREVIEW},
        )

    def pre_receive_hook(self, repo: ResourceRef, hook_id: int) -> PreReceiveHook:
        return self._client.get(
            f"{self._repo_path(repo)}/pre-receive-hooks/{hook_id}",
            PreReceiveHook,
            headers={"Accept": PRE_RECEIVE_PREVIEW},
        )

    def update_pre_receive_hook(
        self,
        repo: ResourceRef,
        hook_id: int,
        enforcement: str,
    ) -> PreReceiveHook:
        """Set the enforcement of a hook: ``enabled``, ``disabled`` or ``testing``."""
        return self._client.patch(
            f"{self._repo_path(repo)}/pre-receive-hooks/{hook_id}",
            PreReceiveHook,
            headers={"Accept": PRE_RECEIVE_PREVIEW},
            enforcement=enforcement,
        )

    def remove_pre_receive_hook(self, repo: ResourceRef, hook_id: int) -> PreReceiveHook:
        """Remove the repository override; the hook falls back to its default."""
        return self._client.delete(
            f"{self._repo_path(repo)}/pre-receive-hooks/{hook_id}",
            PreReceiveHook,
            headers={"Accept": PRE_RECEIVE_PREVIEW},
        )
