"""Team discussion comment models."""

from __future__ import annotations

from pydantic import Field

from ghkit.models.base import GitHubModel
from ghkit.models.users import User
from ghkit.utils.codec import ABSENT, Maybe


class Reactions(GitHubModel):
    """Reaction counters; ``+1`` and ``-1`` are renamed to valid identifiers."""

    url: Maybe[str] = ABSENT
    total_count: Maybe[int] = ABSENT
    plus_one: Maybe[int] = Field(ABSENT, alias="+1")
    minus_one: Maybe[int] = Field(ABSENT, alias="-1")
    laugh: Maybe[int] = ABSENT
    confused: Maybe[int] = ABSENT
    heart: Maybe[int] = ABSENT
    hooray: Maybe[int] = ABSENT
    rocket: Maybe[int] = ABSENT
    eyes: Maybe[int] = ABSENT


class DiscussionComment(GitHubModel):
    number: int
    body: str
    author: Maybe[User] = ABSENT
    body_html: Maybe[str] = ABSENT
    body_version: Maybe[str] = ABSENT
    created_at: Maybe[str] = ABSENT
    last_edited_at: Maybe[str] = ABSENT
    updated_at: Maybe[str] = ABSENT
    discussion_url: Maybe[str] = ABSENT
    html_url: Maybe[str] = ABSENT
    node_id: Maybe[str] = ABSENT
    url: Maybe[str] = ABSENT
    reactions: Maybe[Reactions] = ABSENT


class DiscussionCommentListOptions(GitHubModel):
    direction: Maybe[str] = ABSENT
