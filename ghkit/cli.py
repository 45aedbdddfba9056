"""Command-line interface for ghkit.

Usage:
    ghkit repo octocat/Hello-World
    ghkit exists octocat/Hello-World
    ghkit user octocat
    ghkit user                  (the authenticated user)
    ghkit repos torvalds -n 5
    ghkit events octocat/Hello-World
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from ghkit.client import GitHubClient
from ghkit.exceptions import GitHubError, InvalidRepositoryError, NotFoundError, RateLimitError
from ghkit.models import Event, Repository, User
from ghkit.utils.codec import encode
from ghkit.utils.logger import configure_logging
from ghkit.utils.pagination import collect_all

# ============================================================================
# Display Utilities
# ============================================================================


def format_header(text: str) -> str:
    """Format a header string."""
    return f"\n{'=' * 60}\n  {text}\n{'=' * 60}"


def format_json(data: Any) -> str:
    """Encode models to their wire form and format them as JSON."""
    return json.dumps(encode(data), indent=2, default=str)


def display(value: Any) -> str:
    """Render an optional field; absent and null both show as N/A."""
    if value is None or not value and not isinstance(value, (int, float)):
        return "N/A"
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


# ============================================================================
# Command Handlers
# ============================================================================


def cmd_repo(client: GitHubClient, full_name: str, as_json: bool) -> int:
    """Fetch and display repository info."""
    try:
        repo: Repository = client.repos.get(full_name)
    except (InvalidRepositoryError, NotFoundError):
        print(f"Error: Repository '{full_name}' not found", file=sys.stderr)
        return 1

    if as_json:
        print(format_json(repo))
        return 0

    print(format_header(f"Repository: {repo.full_name}"))
    print(f"  Owner:        {repo.owner.login}")
    print(f"  Description:  {display(repo.description)}")
    print(f"  Language:     {display(repo.language)}")
    print(f"  Stars:        {display(repo.stargazers_count)}")
    print(f"  Forks:        {display(repo.forks_count)}")
    print(f"  Visibility:   {'private' if repo.private else 'public'}")
    license_name = repo.license.name if repo.license else None
    print(f"  License:      {display(license_name)}")
    print(f"  URL:          {repo.html_url}")
    return 0


def cmd_exists(client: GitHubClient, full_name: str, as_json: bool) -> int:
    """Report whether a repository exists; exit status 1 when it doesn't."""
    found = client.repos.exists(full_name)
    if as_json:
        print(json.dumps({"repository": full_name, "exists": found}))
    else:
        print(f"{full_name} {'exists' if found else 'does not exist'}")
    return 0 if found else 1


def cmd_user(client: GitHubClient, login: str | None, as_json: bool) -> int:
    """Fetch a user's profile, or the authenticated user's."""
    try:
        user: User = client.users.get(login)
    except NotFoundError:
        print(f"Error: User '{login}' not found", file=sys.stderr)
        return 1

    if as_json:
        print(format_json(user))
        return 0

    title = f"User: {user.login}" if login else f"Authenticated as: {user.login}"
    print(format_header(title))
    print(f"  Name:         {display(user.name)}")
    print(f"  Bio:          {display(user.bio)}")
    print(f"  Location:     {display(user.location)}")
    print(f"  Company:      {display(user.company)}")
    print(f"  Public Repos: {display(user.public_repos)}")
    print(f"  Followers:    {display(user.followers)}")
    print(f"  URL:          {display(user.html_url)}")
    return 0


def cmd_repos(client: GitHubClient, login: str | None, limit: int, as_json: bool) -> int:
    """List a user's repositories, stopping after ``limit``."""
    pages = client.repos.list_for_user(login, per_page=min(limit, 100))
    repos: list[Repository] = collect_all(pages, max_items=limit)

    if as_json:
        print(format_json(repos))
        return 0

    print(format_header(f"Repositories for: {login or 'you'}"))
    for i, repo in enumerate(repos, 1):
        stars = f"* {display(repo.stargazers_count)}".ljust(10)
        lang = f"[{repo.language}]" if repo.language else ""
        print(f"  {i:2}. {stars} {repo.name} {lang}")
    return 0


def cmd_events(client: GitHubClient, full_name: str, limit: int, as_json: bool) -> int:
    """Show the most recent events of a repository."""
    pages = client.events.repository_events(full_name, per_page=min(limit, 100))
    events: list[Event] = collect_all(pages, max_items=limit)

    if as_json:
        print(format_json(events))
        return 0

    print(format_header(f"Events for: {full_name}"))
    for event in events:
        print(f"  {event.created_at}  {event.type:<28} {event.actor.login}")
    return 0


# ============================================================================
# Argument Parser
# ============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ghkit",
        description="Query the GitHub API from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ghkit repo octocat/Hello-World     Fetch repository info
  ghkit exists octocat/Hello-World   Check that a repository exists
  ghkit user octocat                 Fetch user profile
  ghkit repos torvalds -n 5          List a user's repos
  ghkit events octocat/Hello-World   Show recent repository events
        """,
    )

    parser.add_argument("--token", "-t", help="GitHub token (or set GITHUB_TOKEN)")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    p = subparsers.add_parser("repo", help="Get repository info")
    p.add_argument("full_name", metavar="OWNER/NAME", help="Repository")

    p = subparsers.add_parser("exists", help="Check whether a repository exists")
    p.add_argument("full_name", metavar="OWNER/NAME", help="Repository")

    p = subparsers.add_parser("user", help="Get a user profile")
    p.add_argument("login", nargs="?", help="GitHub login (default: authenticated user)")

    p = subparsers.add_parser("repos", help="List a user's repositories")
    p.add_argument("login", nargs="?", help="GitHub login (default: authenticated user)")
    p.add_argument("-n", "--limit", type=int, default=10, help="Number of repos (default: 10)")

    p = subparsers.add_parser("events", help="List recent repository events")
    p.add_argument("full_name", metavar="OWNER/NAME", help="Repository")
    p.add_argument("-n", "--limit", type=int, default=10, help="Number of events (default: 10)")

    return parser


# ============================================================================
# Main Entry Point
# ============================================================================

# Command dispatch table
COMMANDS = {
    "repo": lambda c, a: cmd_repo(c, a.full_name, a.json),
    "exists": lambda c, a: cmd_exists(c, a.full_name, a.json),
    "user": lambda c, a: cmd_user(c, a.login, a.json),
    "repos": lambda c, a: cmd_repos(c, a.login, a.limit, a.json),
    "events": lambda c, a: cmd_events(c, a.full_name, a.limit, a.json),
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        configure_logging(level=logging.DEBUG)

    try:
        client = GitHubClient(token=args.token)
    except GitHubError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    try:
        return COMMANDS[args.command](client, args)  # type: ignore[no-untyped-call]
    except RateLimitError as e:
        print(f"Error: Rate limit exceeded! Resets at: {e.reset_at}", file=sys.stderr)
        return 1
    except GitHubError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
