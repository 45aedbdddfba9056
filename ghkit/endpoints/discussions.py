"""Team discussion comments endpoint implementation.

Discussions belong to a team, which is addressed by its organization and
slug. Comments are numbered within their discussion.

API Reference: https://docs.github.com/en/rest/teams/discussion-comments

"""

from __future__ import annotations

from ghkit.endpoints.base import BaseEndpoint
from ghkit.models import DiscussionComment, DiscussionCommentListOptions
from ghkit.utils.codec import encode
from ghkit.utils.pagination import Paginator
from ghkit.utils.paths import ResourceRef, resolve_path


class DiscussionsEndpoint(BaseEndpoint):
    """Endpoint for team discussion comments.

    Example:
        >>> for comment in client.discussions.comments("github", "justice-league", 1):
        ...     print(comment.number, comment.body)

    """

    def comments(
        self,
        organization: ResourceRef,
        team_slug: str,
        discussion_number: int,
        options: DiscussionCommentListOptions | None = None,
    ) -> Paginator[DiscussionComment]:
        """List the comments of a team discussion.

        Args:
            organization: Organization login or model.
            team_slug: Slug of the team owning the discussion.
            discussion_number: Number of the discussion.
            options: Sort direction (``asc`` or ``desc``).

        """
        query = encode(options) if options is not None else {}
        return self._client.paginate(
            DiscussionComment,
            self._comments_path(organization, team_slug, discussion_number),
            **query,
        )

    def comment(
        self,
        organization: ResourceRef,
        team_slug: str,
        discussion_number: int,
        comment_number: int,
    ) -> DiscussionComment:
        return self._client.get(
            f"{self._comments_path(organization, team_slug, discussion_number)}/{comment_number}",
            DiscussionComment,
        )

    def create_comment(
        self,
        organization: ResourceRef,
        team_slug: str,
        discussion_number: int,
        body: str,
    ) -> DiscussionComment:
        """Create a comment; the body is Markdown."""
        return self._client.post(
            self._comments_path(organization, team_slug, discussion_number),
            DiscussionComment,
            body=body,
        )

    def update_comment(
        self,
        organization: ResourceRef,
        team_slug: str,
        discussion_number: int,
        comment_number: int,
        body: str,
    ) -> DiscussionComment:
        return self._client.patch(
            f"{self._comments_path(organization, team_slug, discussion_number)}/{comment_number}",
            DiscussionComment,
            body=body,
        )

    def delete_comment(
        self,
        organization: ResourceRef,
        team_slug: str,
        discussion_number: int,
        comment_number: int,
    ) -> bool:
        return self._client.boolean_from_response(
            "DELETE",
            f"{self._comments_path(organization, team_slug, discussion_number)}/{comment_number}",
            false_on=(),
        )

    @staticmethod
    def _comments_path(organization: ResourceRef, team_slug: str, discussion_number: int) -> str:
        team = f"{resolve_path(organization, 'orgs')}/teams/{team_slug}"
        return f"{team}/discussions/{discussion_number}/comments"
