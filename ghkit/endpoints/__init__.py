"""Endpoint groups for the GitHub API.

Available endpoint groups:
    - repos: Repositories, deploy keys, collaborators, stars, pre-receive hooks
    - users: User profiles and followers
    - events: Event timelines
    - migrations: Organization and user migrations
    - discussions: Team discussion comments
    - activity: Watching and subscriptions

"""

from ghkit.endpoints.activity import ActivityEndpoint
from ghkit.endpoints.base import BaseEndpoint
from ghkit.endpoints.discussions import DiscussionsEndpoint
from ghkit.endpoints.events import EventsEndpoint
from ghkit.endpoints.migrations import MigrationsEndpoint
from ghkit.endpoints.repos import ReposEndpoint
from ghkit.endpoints.users import UsersEndpoint

__all__ = [
    "ActivityEndpoint",
    "BaseEndpoint",
    "DiscussionsEndpoint",
    "EventsEndpoint",
    "MigrationsEndpoint",
    "ReposEndpoint",
    "UsersEndpoint",
]
