"""Test configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest

from ghkit import ClientConfig, GitHubClient, TokenAuth

_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_LOGIN",
    "GITHUB_PASSWORD",
    "GITHUB_BASE_URL",
    "GITHUB_TIMEOUT",
    "GITHUB_PER_PAGE",
    "GITHUB_RETRY_ON_RATE_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's GITHUB_* variables (or .env) out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Wire payloads
# =============================================================================


@pytest.fixture
def sample_user_response() -> dict[str, Any]:
    """Full profile as returned by GET /users/octocat."""
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "url": "https://api.github.com/users/octocat",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
        "name": "The Octocat",
        "company": "@github",
        "location": "San Francisco",
        "email": "octocat@github.com",
        "hireable": None,
        "bio": "There once was...",
        "public_repos": 8,
        "followers": 20,
        "following": 0,
        "created_at": "2008-01-14T04:33:35Z",
        "updated_at": "2008-01-14T04:33:35Z",
    }


@pytest.fixture
def sample_owner_response() -> dict[str, Any]:
    """The abbreviated user object embedded in other resources."""
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "url": "https://api.github.com/users/octocat",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
    }


@pytest.fixture
def sample_repo_response(sample_owner_response: dict[str, Any]) -> dict[str, Any]:
    """Repository as returned by GET /repos/octocat/Hello-World."""
    return {
        "id": 1296269,
        "node_id": "MDEwOlJlcG9zaXRvcnkxMjk2MjY5",
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "private": False,
        "owner": sample_owner_response,
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "This your first repo!",
        "fork": False,
        "url": "https://api.github.com/repos/octocat/Hello-World",
        "forks_url": "https://api.github.com/repos/octocat/Hello-World/forks",
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2022-06-10T12:42:47Z",
        "pushed_at": "2022-06-10T12:41:42Z",
        "homepage": "https://github.com",
        "size": 1,
        "stargazers_count": 80000,
        "watchers_count": 80000,
        "language": "Python",
        "has_issues": True,
        "has_wiki": True,
        "has_pages": False,
        "forks_count": 9000,
        "archived": False,
        "disabled": False,
        "open_issues_count": 0,
        "license": {
            "key": "mit",
            "name": "MIT License",
            "spdx_id": "MIT",
            "url": "https://api.github.com/licenses/mit",
            "node_id": "MDc6TGljZW5zZTEz",
        },
        "topics": ["octocat", "api", "example"],
        "visibility": "public",
        "default_branch": "main",
    }


@pytest.fixture
def sample_event_response(sample_owner_response: dict[str, Any]) -> dict[str, Any]:
    """Sample event from a repository timeline."""
    return {
        "id": "22249084947",
        "type": "WatchEvent",
        "actor": sample_owner_response,
        "repo": {
            "id": 1296269,
            "name": "octocat/Hello-World",
            "url": "https://api.github.com/repos/octocat/Hello-World",
        },
        "payload": {"action": "started"},
        "public": True,
        "created_at": "2022-06-09T12:47:28Z",
    }


@pytest.fixture
def sample_deploy_key_response() -> dict[str, Any]:
    return {
        "id": 1,
        "key": "ssh-rsa AAA...",
        "url": "https://api.github.com/repos/octocat/Hello-World/keys/1",
        "title": "octocat@octomac",
        "verified": True,
        "created_at": "2014-12-10T15:53:42Z",
        "read_only": True,
    }


@pytest.fixture
def sample_migration_response(sample_repo_response: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": 79,
        "guid": "0b989ba4-242f-11e5-81e1-c7b6966d2516",
        "state": "pending",
        "lock_repositories": True,
        "exclude_attachments": False,
        "url": "https://api.github.com/orgs/octo-org/migrations/79",
        "created_at": "2015-07-06T15:33:38-07:00",
        "updated_at": "2015-07-06T15:33:38-07:00",
        "repositories": [sample_repo_response],
    }


@pytest.fixture
def sample_comment_response(sample_owner_response: dict[str, Any]) -> dict[str, Any]:
    """Sample team discussion comment."""
    return {
        "author": sample_owner_response,
        "body": "Do you like apples?",
        "body_html": "<p>Do you like apples?</p>",
        "body_version": "5eb32b219cdc6a5a9b29ba5d6caa9c51",
        "created_at": "2018-01-15T23:53:58Z",
        "last_edited_at": None,
        "discussion_url": "https://api.github.com/teams/2403582/discussions/1",
        "html_url": "https://github.com/orgs/github/teams/justice-league/discussions/1/comments/1",
        "node_id": "MDIxOlRlYW1EaXNjdXNzaW9uQ29tbWVudDE=",
        "number": 1,
        "updated_at": "2018-01-15T23:53:58Z",
        "url": "https://api.github.com/teams/2403582/discussions/1/comments/1",
        "reactions": {
            "url": "https://api.github.com/teams/2403582/discussions/1/reactions",
            "total_count": 5,
            "+1": 3,
            "-1": 1,
            "laugh": 0,
            "confused": 0,
            "heart": 1,
            "hooray": 0,
            "eyes": 0,
            "rocket": 0,
        },
    }


# =============================================================================
# Clients and configs
# =============================================================================


@pytest.fixture
def make_client() -> Iterator[Callable[..., GitHubClient]]:
    """Factory for clients talking to a ``Recorder`` (or any handler)."""
    clients: list[GitHubClient] = []

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        **overrides: Any,
    ) -> GitHubClient:
        overrides.setdefault("auth", TokenAuth("test_token_12345"))
        client = GitHubClient(transport=httpx.MockTransport(handler), **overrides)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def config() -> ClientConfig:
    """Token-authenticated config with a short timeout."""
    return ClientConfig(auth=TokenAuth("test_token_12345"), timeout=5.0)


# =============================================================================
# Rate-limit headers
# =============================================================================


@pytest.fixture
def rate_limit_headers() -> dict[str, str]:
    """Headers of a response with quota left."""
    return {
        "X-RateLimit-Limit": "5000",
        "X-RateLimit-Remaining": "4999",
        "X-RateLimit-Reset": "1609459200",
        "X-RateLimit-Resource": "core",
    }


@pytest.fixture
def rate_limit_exceeded_headers() -> dict[str, str]:
    """Headers of a response that used the last request of the window."""
    return {
        "X-RateLimit-Limit": "5000",
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": "1609459200",
        "X-RateLimit-Resource": "core",
    }
