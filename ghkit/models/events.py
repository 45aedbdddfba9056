"""Activity event models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from ghkit.models.base import GitHubModel
from ghkit.models.users import Organization, User
from ghkit.utils.codec import ABSENT, Maybe


class EventRepository(GitHubModel):
    """The abbreviated repository reference embedded in events."""

    path_attribute = "name"

    id: int
    name: str
    url: str


class Event(GitHubModel):
    """An entry of an event timeline.

    The payload differs per event ``type`` and is kept as the raw JSON
    object under ``raw_payload``.
    """

    id: str
    type: str
    actor: User
    repo: EventRepository
    public: bool
    created_at: str
    raw_payload: Maybe[dict[str, Any]] = Field(ABSENT, alias="payload")
    org: Maybe[Organization] = ABSENT
