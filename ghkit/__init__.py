"""ghkit: a typed client for the GitHub REST API (v3).

Example:
    >>> from ghkit import GitHubClient
    >>> with GitHubClient(token="ghp_xxx") as client:
    ...     repo = client.repos.get("octocat/Hello-World")
    ...     print(repo.full_name, repo.owner.login)

"""

from ghkit.auth import AppAuth, AuthStrategy, BasicAuth, NoAuth, TokenAuth, create_auth
from ghkit.client import GitHubClient
from ghkit.config import ClientConfig
from ghkit.exceptions import (
    ClientError,
    ConfigurationError,
    DecodeError,
    FieldError,
    ForbiddenError,
    GitHubError,
    HTTPError,
    InvalidReferenceError,
    InvalidRepositoryError,
    MissingFieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    TypeMismatchError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from ghkit.utils.codec import ABSENT, Maybe
from ghkit.utils.logger import configure_logging
from ghkit.utils.pagination import Paginator, collect_all

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "AppAuth",
    "AuthStrategy",
    "BasicAuth",
    "ClientConfig",
    "ClientError",
    "ConfigurationError",
    "DecodeError",
    "FieldError",
    "ForbiddenError",
    "GitHubClient",
    "GitHubError",
    "HTTPError",
    "InvalidReferenceError",
    "InvalidRepositoryError",
    "Maybe",
    "MissingFieldError",
    "NoAuth",
    "NotFoundError",
    "Paginator",
    "RateLimitError",
    "ServerError",
    "TokenAuth",
    "TransportError",
    "TypeMismatchError",
    "UnauthorizedError",
    "UnprocessableEntityError",
    "collect_all",
    "configure_logging",
    "create_auth",
]
