"""User and organization models."""

from __future__ import annotations

from ghkit.models.base import GitHubModel
from ghkit.utils.codec import ABSENT, Maybe


class User(GitHubModel):
    """A GitHub user, as embedded in other resources or fetched directly.

    Only the identity fields are required; profile fields are sent for
    full user lookups and left ``ABSENT`` for embedded references.
    """

    path_attribute = "login"

    login: str
    id: int
    node_id: Maybe[str] = ABSENT
    avatar_url: Maybe[str] = ABSENT
    url: Maybe[str] = ABSENT
    html_url: Maybe[str] = ABSENT
    type: Maybe[str] = ABSENT
    site_admin: bool = False

    name: Maybe[str] = ABSENT
    company: Maybe[str] = ABSENT
    blog: Maybe[str] = ABSENT
    location: Maybe[str] = ABSENT
    email: Maybe[str] = ABSENT
    bio: Maybe[str] = ABSENT
    public_repos: Maybe[int] = ABSENT
    public_gists: Maybe[int] = ABSENT
    followers: Maybe[int] = ABSENT
    following: Maybe[int] = ABSENT
    created_at: Maybe[str] = ABSENT
    updated_at: Maybe[str] = ABSENT

    def __str__(self) -> str:
        return f"User({self.login})"


class Organization(GitHubModel):
    """A GitHub organization."""

    path_attribute = "login"

    login: str
    id: int
    url: Maybe[str] = ABSENT
    avatar_url: Maybe[str] = ABSENT
    name: Maybe[str] = ABSENT
    description: Maybe[str] = ABSENT
    html_url: Maybe[str] = ABSENT
    public_repos: Maybe[int] = ABSENT

    def __str__(self) -> str:
        return f"Organization({self.login})"
