"""Watching (subscription) models."""

from __future__ import annotations

from ghkit.models.base import GitHubModel
from ghkit.utils.codec import ABSENT, Maybe


class Subscription(GitHubModel):
    subscribed: bool
    ignored: bool
    reason: Maybe[str] = ABSENT
    created_at: Maybe[str] = ABSENT
    url: Maybe[str] = ABSENT
    # only sent for repository subscriptions
    repository_url: Maybe[str] = ABSENT
    # only sent for thread subscriptions
    thread_url: Maybe[str] = ABSENT
