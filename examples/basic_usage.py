#!/usr/bin/env python
"""Basic usage examples for ghkit.

Fetches public users, repositories and events, so no token is needed.
Set GITHUB_TOKEN to raise the rate limit from 60 to 5000 requests an hour.

Run: python examples/basic_usage.py
"""

from ghkit import GitHubClient, NotFoundError, collect_all


def main() -> None:
    """Demonstrate the most common read operations."""
    print("=" * 50)
    print("ghkit - Basic Usage Examples")
    print("=" * 50)

    with GitHubClient() as client:
        # --- Users ---
        print("\n📧 Fetching a user...")
        user = client.users.get("octocat")
        print(f"  Login: {user.login}")
        print(f"  Name: {user.name}")
        print(f"  Public repos: {user.public_repos}")

        # --- Repositories ---
        print("\n📁 Fetching a repository...")
        repo = client.repos.get("python/cpython")
        print(f"  Full name: {repo.full_name}")
        print(f"  Stars: {repo.stargazers_count:,}")
        print(f"  Language: {repo.language}")

        # Fields GitHub did not send are ABSENT, not None
        print(f"  License: {repo.license.name if repo.license else 'none'}")

        # --- Existence checks ---
        print("\n🔎 Checking repositories...")
        for name in ("octocat/Hello-World", "octocat/does-not-exist", "octocat/bad name"):
            print(f"  {name}: {client.repos.exists(name)}")

        try:
            client.users.get("this-user-should-not-exist-4242")
        except NotFoundError as e:
            print(f"  Missing user -> {e.status_code} {e.message}")

        # --- Events ---
        print("\n📰 Recent events...")
        events = collect_all(client.events.repository_events("python/cpython"), max_items=5)
        for event in events:
            print(f"  - {event.type} by {event.actor.login}")

    print("\n✅ Done!")


if __name__ == "__main__":
    main()
