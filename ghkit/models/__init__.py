"""Models for GitHub API resources.

Every model is a ``GitHubModel`` and is registered in the codec's schema
registry under its class name.
"""

from ghkit.models.activity import Subscription
from ghkit.models.base import GitHubModel
from ghkit.models.discussions import DiscussionComment, DiscussionCommentListOptions, Reactions
from ghkit.models.events import Event, EventRepository
from ghkit.models.migrations import (
    Migration,
    MigrationOptions,
    StartMigration,
    StartUserMigration,
    UserMigration,
    UserMigrationOptions,
)
from ghkit.models.repos import License, PreReceiveHook, Repository, RepositoryDeployKey
from ghkit.models.users import Organization, User

__all__ = [
    "DiscussionComment",
    "DiscussionCommentListOptions",
    "Event",
    "EventRepository",
    "GitHubModel",
    "License",
    "Migration",
    "MigrationOptions",
    "Organization",
    "PreReceiveHook",
    "Reactions",
    "Repository",
    "RepositoryDeployKey",
    "StartMigration",
    "StartUserMigration",
    "Subscription",
    "User",
    "UserMigration",
    "UserMigrationOptions",
]
