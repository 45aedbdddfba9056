"""Migrations endpoint implementation.

Organization and user migrations export repositories and their metadata
into an archive. The two flows take different request bodies: an
organization migration must list its repositories, a user migration may
omit everything.

API Reference: https://docs.github.com/en/rest/migrations

"""

from __future__ import annotations

from typing import Any

from ghkit.endpoints.base import BaseEndpoint
from ghkit.models import (
    Migration,
    MigrationOptions,
    StartMigration,
    StartUserMigration,
    UserMigration,
    UserMigrationOptions,
)
from ghkit.utils.codec import ABSENT
from ghkit.utils.pagination import Paginator
from ghkit.utils.paths import ResourceRef, resolve_path

MIGRATIONS_PREVIEW = "application/vnd.github.wyandotte-preview+json"

_PREVIEW_HEADERS = {"Accept": MIGRATIONS_PREVIEW}


class MigrationsEndpoint(BaseEndpoint):
    """Endpoint for organization and user migrations.

    Example:
        >>> migration = client.migrations.start("github", ["github/Hello-World"])
        >>> client.migrations.status("github", migration.id).state
        'pending'

    """

    # =========================================================================
    # Organization migrations
    # =========================================================================

    def start(
        self,
        organization: ResourceRef,
        repositories: list[str],
        options: MigrationOptions | None = None,
    ) -> Migration:
        """Start an organization migration.

        Args:
            organization: Organization login or model.
            repositories: ``owner/name`` of every repository to export.
            options: Locking and attachment settings; GitHub's defaults apply
                when omitted.

        """
        body = StartMigration(
            repositories=repositories,
            lock_repositories=ABSENT if options is None else options.lock_repositories,
            exclude_attachments=ABSENT if options is None else options.exclude_attachments,
        )
        return self._client.post(
            self._org_migrations(organization),
            Migration,
            data=body,
            headers=_PREVIEW_HEADERS,
        )

    def list_for_org(self, organization: ResourceRef, **options: Any) -> Paginator[Migration]:
        """List the most recent migrations of an organization."""
        return self._client.paginate(
            Migration,
            self._org_migrations(organization),
            headers=_PREVIEW_HEADERS,
            **options,
        )

    def status(self, organization: ResourceRef, migration_id: int) -> Migration:
        """Get a migration; ``state`` is one of pending, exporting, exported or failed."""
        return self._client.get(
            f"{self._org_migrations(organization)}/{migration_id}",
            Migration,
            headers=_PREVIEW_HEADERS,
        )

    def delete_archive(self, organization: ResourceRef, migration_id: int) -> bool:
        return self._client.boolean_from_response(
            "DELETE",
            f"{self._org_migrations(organization)}/{migration_id}/archive",
            false_on=(),
        )

    def unlock_repository(
        self,
        organization: ResourceRef,
        migration_id: int,
        repo_name: str,
    ) -> bool:
        """Unlock a repository that was locked for migration."""
        return self._client.boolean_from_response(
            "DELETE",
            f"{self._org_migrations(organization)}/{migration_id}/repos/{repo_name}/lock",
            false_on=(),
        )

    # =========================================================================
    # User migrations
    # =========================================================================

    def start_user_migration(
        self,
        repositories: list[str] | None = None,
        options: UserMigrationOptions | None = None,
    ) -> UserMigration:
        """Start a migration of the authenticated user's repositories."""
        body = StartUserMigration(
            repositories=ABSENT if repositories is None else repositories,
            lock_repositories=ABSENT if options is None else options.lock_repositories,
            exclude_attachments=ABSENT if options is None else options.exclude_attachments,
        )
        return self._client.post(
            "user/migrations",
            UserMigration,
            data=body,
            headers=_PREVIEW_HEADERS,
        )

    def user_migrations(self, **options: Any) -> Paginator[UserMigration]:
        return self._client.paginate(
            UserMigration,
            "user/migrations",
            headers=_PREVIEW_HEADERS,
            **options,
        )

    def user_migration_status(self, migration_id: int) -> UserMigration:
        return self._client.get(
            f"user/migrations/{migration_id}",
            UserMigration,
            headers=_PREVIEW_HEADERS,
        )

    def delete_user_migration_archive(self, migration_id: int) -> bool:
        return self._client.boolean_from_response(
            "DELETE", f"user/migrations/{migration_id}/archive", false_on=()
        )

    def unlock_user_repository(self, migration_id: int, repo_name: str) -> bool:
        return self._client.boolean_from_response(
            "DELETE", f"user/migrations/{migration_id}/repos/{repo_name}/lock", false_on=()
        )

    @staticmethod
    def _org_migrations(organization: ResourceRef) -> str:
        return f"{resolve_path(organization, 'orgs')}/migrations"
