"""Repository models, including deploy keys and pre-receive hooks."""

from __future__ import annotations

from ghkit.models.base import GitHubModel
from ghkit.models.users import User
from ghkit.utils.codec import ABSENT, Maybe


class License(GitHubModel):
    key: str
    name: str
    spdx_id: Maybe[str] = ABSENT
    url: Maybe[str] = ABSENT
    node_id: Maybe[str] = ABSENT


class Repository(GitHubModel):
    """A GitHub repository.

    Instances can be passed anywhere a repository reference is accepted;
    their ``full_name`` is used to build the path.
    """

    path_attribute = "full_name"

    id: int
    name: str
    full_name: str
    owner: User
    private: bool
    html_url: str
    url: str
    node_id: Maybe[str] = ABSENT
    description: Maybe[str] = ABSENT
    fork: bool = False
    homepage: Maybe[str] = ABSENT
    language: Maybe[str] = ABSENT
    size: Maybe[int] = ABSENT
    stargazers_count: Maybe[int] = ABSENT
    watchers_count: Maybe[int] = ABSENT
    forks_count: Maybe[int] = ABSENT
    open_issues_count: Maybe[int] = ABSENT
    default_branch: Maybe[str] = ABSENT
    topics: Maybe[list[str]] = ABSENT
    license: Maybe[License] = ABSENT
    visibility: Maybe[str] = ABSENT
    archived: bool = False
    disabled: bool = False
    has_issues: Maybe[bool] = ABSENT
    has_wiki: Maybe[bool] = ABSENT
    has_pages: Maybe[bool] = ABSENT
    created_at: Maybe[str] = ABSENT
    updated_at: Maybe[str] = ABSENT
    pushed_at: Maybe[str] = ABSENT

    def __str__(self) -> str:
        return f"Repository({self.full_name})"


class RepositoryDeployKey(GitHubModel):
    """An SSH key granting access to a single repository."""

    id: int
    key: str
    url: str
    title: str
    verified: Maybe[bool] = ABSENT
    created_at: Maybe[str] = ABSENT
    read_only: bool = False


class PreReceiveHook(GitHubModel):
    """A pre-receive hook as configured on a repository (GitHub Enterprise)."""

    id: int
    name: str
    enforcement: str
    config_url: Maybe[str] = ABSENT
