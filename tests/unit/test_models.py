"""Unit tests for the API models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ghkit.exceptions import MissingFieldError
from ghkit.models import (
    DiscussionComment,
    Event,
    Migration,
    MigrationOptions,
    Organization,
    PreReceiveHook,
    Reactions,
    Repository,
    RepositoryDeployKey,
    StartMigration,
    StartUserMigration,
    Subscription,
    User,
    UserMigration,
)
from ghkit.utils.codec import ABSENT, schema_for


class TestUserModel:
    """User decoding, from both the embedded and the full profile shape."""

    def test_embedded_owner_leaves_profile_fields_absent(self, sample_owner_response):
        user = User.from_wire(sample_owner_response)

        assert (user.login, user.id, user.type) == ("octocat", 1, "User")
        assert user.site_admin is False
        assert user.name is ABSENT
        assert user.public_repos is ABSENT

    def test_full_profile(self, sample_user_response):
        user = User.from_wire(sample_user_response)

        assert user.name == "The Octocat"
        assert user.location == "San Francisco"
        assert user.followers == 20
        assert user.email == "octocat@github.com"
        assert user.created_at == "2008-01-14T04:33:35Z"

    def test_str_is_login(self, sample_owner_response):
        assert str(User.from_wire(sample_owner_response)) == "User(octocat)"

    def test_models_are_frozen(self, sample_user_response):
        user = User.from_wire(sample_user_response)
        with pytest.raises(ValidationError):
            user.login = "hubot"  # type: ignore[misc]


class TestRepositoryModel:
    """Repository decoding, including the nested owner and license."""

    def test_nested_objects(self, sample_repo_response):
        repo = Repository.from_wire(sample_repo_response)

        assert repo.full_name == "octocat/Hello-World"
        assert isinstance(repo.owner, User)
        assert repo.owner.login == "octocat"
        assert repo.license
        assert repo.license.spdx_id == "MIT"
        assert repo.topics == ["octocat", "api", "example"]

    def test_booleans_with_defaults(self, sample_repo_response):
        for name in ("fork", "archived", "disabled"):
            del sample_repo_response[name]
        repo = Repository.from_wire(sample_repo_response)
        assert (repo.fork, repo.archived, repo.disabled) == (False, False, False)

    def test_str_is_full_name(self, sample_repo_response):
        assert str(Repository.from_wire(sample_repo_response)) == "Repository(octocat/Hello-World)"

    def test_null_license(self, sample_repo_response):
        sample_repo_response["license"] = None
        repo = Repository.from_wire(sample_repo_response)
        assert repo.license is None

    def test_to_wire_omits_absent_fields(self, sample_repo_response):
        del sample_repo_response["homepage"]
        wire = Repository.from_wire(sample_repo_response).to_wire()

        assert "homepage" not in wire
        assert wire["owner"]["login"] == "octocat"
        assert "followers_url" not in wire

    def test_owner_is_required(self, sample_repo_response):
        del sample_repo_response["owner"]
        with pytest.raises(MissingFieldError) as exc_info:
            Repository.from_wire(sample_repo_response)
        assert exc_info.value.field == "owner"


class TestRepositoryResources:
    """Deploy keys and pre-receive hooks."""

    def test_parse_deploy_key(self, sample_deploy_key_response):
        key = RepositoryDeployKey.from_wire(sample_deploy_key_response)
        assert key.title == "octocat@octomac"
        assert key.read_only is True
        assert key.verified is True

    def test_deploy_key_read_only_defaults_to_false(self, sample_deploy_key_response):
        del sample_deploy_key_response["read_only"]
        key = RepositoryDeployKey.from_wire(sample_deploy_key_response)
        assert key.read_only is False

    def test_parse_pre_receive_hook(self):
        hook = PreReceiveHook.from_wire(
            {
                "id": 42,
                "name": "Check Commits",
                "enforcement": "disabled",
            }
        )
        assert hook.enforcement == "disabled"
        assert hook.config_url is ABSENT


class TestEventModel:
    """Tests for the Event model."""

    def test_parse_event(self, sample_event_response):
        event = Event.from_wire(sample_event_response)

        assert event.id == "22249084947"
        assert event.type == "WatchEvent"
        assert event.actor.login == "octocat"
        assert event.repo.name == "octocat/Hello-World"
        assert event.raw_payload == {"action": "started"}
        assert event.org is ABSENT

    def test_missing_payload_is_absent(self, sample_event_response):
        del sample_event_response["payload"]
        event = Event.from_wire(sample_event_response)

        assert event.raw_payload is ABSENT
        assert "payload" not in event.to_wire()

    def test_payload_keeps_its_wire_name(self, sample_event_response):
        wire = Event.from_wire(sample_event_response).to_wire()
        assert wire["payload"] == {"action": "started"}
        assert "raw_payload" not in wire


class TestMigrationModels:
    """Organization and user migrations are distinct schemas."""

    def test_parse_migration(self, sample_migration_response):
        migration = Migration.from_wire(sample_migration_response)

        assert migration.state == "pending"
        assert migration.lock_repositories is True
        assert migration.repositories[0].full_name == "octocat/Hello-World"

    def test_user_migration_uses_its_own_schema(self, sample_migration_response):
        migration = UserMigration.from_wire(sample_migration_response)
        assert isinstance(migration, UserMigration)
        assert schema_for(UserMigration) is not schema_for(Migration)

    def test_start_migration_requires_repositories(self):
        assert schema_for(StartMigration).field("repositories").required
        assert not schema_for(StartUserMigration).field("repositories").required

    def test_options_optionality_differs(self):
        assert schema_for(MigrationOptions).field("lock_repositories").required
        with pytest.raises(MissingFieldError):
            MigrationOptions.from_wire({"lock_repositories": True})

    def test_encode_start_migration(self):
        body = StartMigration(repositories=["octocat/Hello-World"], lock_repositories=True)
        assert body.to_wire() == {
            "repositories": ["octocat/Hello-World"],
            "lock_repositories": True,
        }


class TestDiscussionCommentModel:
    """Tests for the DiscussionComment model."""

    def test_parse_comment(self, sample_comment_response):
        comment = DiscussionComment.from_wire(sample_comment_response)

        assert comment.number == 1
        assert comment.body == "Do you like apples?"
        assert comment.author.login == "octocat"
        assert comment.last_edited_at is None

    def test_reaction_counters(self, sample_comment_response):
        reactions = DiscussionComment.from_wire(sample_comment_response).reactions

        assert reactions.total_count == 5
        assert reactions.plus_one == 3
        assert reactions.minus_one == 1
        assert reactions.to_wire()["+1"] == 3

    def test_empty_reactions_are_absent(self):
        reactions = Reactions.from_wire({})
        assert reactions.total_count is ABSENT
        assert reactions.plus_one is ABSENT
        assert reactions.to_wire() == {}


class TestSubscriptionModel:
    def test_parse_repository_subscription(self):
        sub = Subscription.from_wire(
            {
                "subscribed": True,
                "ignored": False,
                "reason": None,
                "created_at": "2012-10-06T21:34:12Z",
                "url": "https://api.github.com/repos/octocat/example/subscription",
                "repository_url": "https://api.github.com/repos/octocat/example",
            }
        )
        assert sub.subscribed is True
        assert sub.reason is None
        assert sub.thread_url is ABSENT


class TestOrganizationModel:
    def test_only_login_and_id_are_required(self):
        org = Organization.from_wire({"login": "github", "id": 9919, "public_repos": 480})

        assert org.public_repos == 480
        assert org.description is ABSENT
        assert str(org) == "Organization(github)"

    def test_missing_login(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Organization.from_wire({"id": 9919})
        assert exc_info.value.field == "login"
