"""Migration models for organization and user migrations.

The organization and user variants are kept as separate schemas. The user
endpoints accept every option as optional, while an organization migration
must name its repositories.
"""

from __future__ import annotations

from ghkit.models.base import GitHubModel
from ghkit.models.repos import Repository
from ghkit.utils.codec import ABSENT, Maybe


class Migration(GitHubModel):
    id: int
    guid: str
    state: str
    lock_repositories: bool
    exclude_attachments: bool
    url: str
    created_at: str
    updated_at: str
    repositories: list[Repository]


class MigrationOptions(GitHubModel):
    lock_repositories: bool
    exclude_attachments: bool


class StartMigration(GitHubModel):
    """Request body for starting an organization migration."""

    repositories: list[str]
    lock_repositories: Maybe[bool] = ABSENT
    exclude_attachments: Maybe[bool] = ABSENT


class UserMigration(GitHubModel):
    id: int
    guid: str
    state: str
    lock_repositories: bool
    exclude_attachments: bool
    url: str
    created_at: str
    updated_at: str
    repositories: list[Repository]


class UserMigrationOptions(GitHubModel):
    lock_repositories: Maybe[bool] = ABSENT
    exclude_attachments: Maybe[bool] = ABSENT


class StartUserMigration(GitHubModel):
    """Request body for starting a migration of the authenticated user."""

    repositories: Maybe[list[str]] = ABSENT
    lock_repositories: Maybe[bool] = ABSENT
    exclude_attachments: Maybe[bool] = ABSENT
