#!/usr/bin/env python
"""Pagination examples.

List operations return a lazy ``Paginator``: nothing is requested until the
first item is pulled, and each following page is fetched from the ``next``
link only when the previous one is used up.

Run: python examples/pagination.py
"""

from itertools import islice

from ghkit import GitHubClient, collect_all


def demo_first_items(client: GitHubClient) -> None:
    """Take a few items; only the pages needed are fetched."""
    print("\n1️⃣  First Items Only")
    print("-" * 40)

    repos = client.repos.list_for_user("torvalds", per_page=10)
    for repo in islice(repos, 5):
        print(f"    - {repo.name}")
    print(f"  Requests sent: {repos.requests_sent}")


def demo_iter_all(client: GitHubClient) -> None:
    """Walk every page of a listing."""
    print("\n2️⃣  Iterate All Results")
    print("-" * 40)

    count = 0
    for repo in client.repos.list_for_user("gvanrossum", per_page=30):
        count += 1
        if count <= 5:
            print(f"    {count}. {repo.name}")
        elif count == 6:
            print("    ...")

    print(f"\n  Total repos fetched: {count}")


def demo_collect_all(client: GitHubClient) -> None:
    """Gather a bounded number of items into a list."""
    print("\n3️⃣  Collect With a Limit")
    print("-" * 40)

    users = collect_all(client.users.list_all(since=0, per_page=25), max_items=60)
    print(f"  Collected {len(users)} users, last id: {users[-1].id}")


def demo_stop_early(client: GitHubClient) -> None:
    """Close a paginator to stop it for good."""
    print("\n4️⃣  Stopping Early")
    print("-" * 40)

    events = client.events.public_events(per_page=10)
    first = next(events)
    print(f"  First public event: {first.type}")
    events.close()
    print(f"  After close(): {list(events)}")


def main() -> None:
    """Run all pagination demos."""
    print("=" * 50)
    print("ghkit - Pagination Examples")
    print("=" * 50)

    with GitHubClient() as client:
        demo_first_items(client)
        demo_iter_all(client)
        demo_collect_all(client)
        demo_stop_early(client)

    print("\n" + "=" * 50)
    print("💡 Tips:")
    print("   - Use per_page to control batch size (max 100)")
    print("   - Paginators are lazy; break out of a loop to stop fetching")
    print("   - collect_all(..., max_items=N) never fetches past item N")
    print("=" * 50)


if __name__ == "__main__":
    main()
