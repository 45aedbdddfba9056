"""Unit tests for the exceptions module and response classification."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from ghkit.exceptions import (
    ClientError,
    FieldError,
    ForbiddenError,
    GitHubError,
    HTTPError,
    InvalidRepositoryError,
    MissingFieldError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    TypeMismatchError,
    UnauthorizedError,
    UnprocessableEntityError,
    classify,
    error_from_response,
)
from ghkit.utils.http import ResponseEnvelope


def body(data: object) -> bytes:
    return json.dumps(data).encode()


class TestGitHubError:
    """Tests for the base GitHubError class."""

    def test_basic_error(self):
        """Test creating a basic error."""
        error = GitHubError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.response_data == {}

    def test_error_with_response_data(self):
        """Test error with response data."""
        data = {"message": "Not found", "documentation_url": "https://docs.github.com"}
        error = GitHubError("Not found", response_data=data)
        assert error.response_data == data

    def test_repr(self):
        error = GitHubError("Test error")
        assert "GitHubError" in repr(error)
        assert "Test error" in repr(error)


class TestErrorHierarchy:
    """Status errors share HTTPError; decode and transport errors don't."""

    def test_client_errors(self):
        for cls in (NotFoundError, InvalidRepositoryError, UnauthorizedError, ForbiddenError):
            assert issubclass(cls, ClientError)
        assert issubclass(RateLimitError, ClientError)
        assert issubclass(UnprocessableEntityError, ClientError)

    def test_server_error_is_not_client_error(self):
        assert issubclass(ServerError, HTTPError)
        assert not issubclass(ServerError, ClientError)

    def test_default_status_codes(self):
        assert NotFoundError().status_code == 404
        assert UnauthorizedError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert UnprocessableEntityError().status_code == 422
        assert ServerError().status_code == 500

    def test_transport_error_kind(self):
        error = TransportError("timed out", "timeout")
        assert error.kind == "timeout"
        assert not isinstance(error, HTTPError)

    def test_transport_error_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            TransportError("boom", "dns")

    def test_decode_error_messages(self):
        missing = MissingFieldError("owner.login")
        assert missing.field == "owner.login"
        assert "owner.login" in str(missing)

        mismatch = TypeMismatchError("id", "integer", "string")
        assert mismatch.expected == "integer"
        assert mismatch.actual == "string"
        assert "Expected integer for field 'id', got string" == str(mismatch)


class TestRateLimitError:
    """Tests for RateLimitError."""

    def test_str_includes_reset(self):
        reset = datetime(2024, 1, 1, tzinfo=timezone.utc)
        error = RateLimitError(reset_at=reset)
        assert "rate limit" in str(error).lower()
        assert "2024-01-01" in str(error)

    def test_seconds_until_reset_prefers_retry_after(self):
        error = RateLimitError(
            reset_at=datetime.now(timezone.utc) + timedelta(hours=1),
            retry_after=30,
        )
        assert error.seconds_until_reset() == 30.0

    def test_seconds_until_reset_from_reset_at(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        error = RateLimitError(reset_at=now + timedelta(seconds=90))
        assert error.seconds_until_reset(now=now) == 90.0

    def test_seconds_until_reset_in_the_past_is_zero(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        error = RateLimitError(reset_at=now - timedelta(seconds=5))
        assert error.seconds_until_reset(now=now) == 0.0

    def test_seconds_until_reset_unknown(self):
        assert RateLimitError().seconds_until_reset() is None


class TestErrorFromResponse:
    """Status code, body and headers map to exactly one error type."""

    def test_success_is_not_an_error(self):
        assert error_from_response(200, b"{}") is None
        assert error_from_response(204, b"") is None

    def test_404_not_found(self):
        error = error_from_response(404, body({"message": "Not Found"}), path="/users/ghost")
        assert type(error) is NotFoundError
        assert error.message == "Not Found"

    def test_404_malformed_repository(self):
        path = "/repos/owner/bad name"
        error = error_from_response(404, body({"message": "Not Found"}), path=path)
        assert isinstance(error, InvalidRepositoryError)
        assert error.repository == "owner/bad name"

    def test_404_repository_without_name(self):
        error = error_from_response(404, b"", path="/repos/owner")
        assert isinstance(error, InvalidRepositoryError)
        assert error.repository == "owner"

    def test_404_well_formed_repository(self):
        error = error_from_response(404, b"", path="/repos/octocat/Hello-World.js")
        assert type(error) is NotFoundError

    def test_401_unauthorized(self):
        error = error_from_response(401, body({"message": "Bad credentials"}))
        assert isinstance(error, UnauthorizedError)
        assert str(error) == "Bad credentials"

    def test_403_forbidden(self):
        error = error_from_response(403, body({"message": "Must have admin rights"}))
        assert type(error) is ForbiddenError

    def test_403_rate_limited_by_header(self, rate_limit_exceeded_headers):
        content = body({"message": "Forbidden"})
        error = error_from_response(403, content, rate_limit_exceeded_headers)

        assert isinstance(error, RateLimitError)
        assert error.reset_at == datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert error.limit == 5000
        assert error.remaining == 0

    def test_403_rate_limited_by_message(self):
        message = "API rate limit exceeded for 127.0.0.1."
        error = error_from_response(403, body({"message": message}))
        assert isinstance(error, RateLimitError)
        assert error.reset_at is None

    def test_403_secondary_rate_limit(self):
        headers = {"Retry-After": "60"}
        content = body({"message": "You have triggered an abuse detection mechanism"})
        error = error_from_response(403, content, headers)
        assert isinstance(error, RateLimitError)
        assert error.retry_after == 60

    def test_403_with_remaining_quota_is_forbidden(self, rate_limit_headers):
        error = error_from_response(403, body({"message": "Forbidden"}), rate_limit_headers)
        assert type(error) is ForbiddenError

    def test_429_rate_limited(self):
        error = error_from_response(429, b"")
        assert isinstance(error, RateLimitError)
        assert error.status_code == 429

    def test_422_field_errors(self):
        data = {
            "message": "Validation Failed",
            "errors": [
                {"resource": "Repository", "field": "name", "code": "missing_field"},
                {"resource": "Repository", "field": "private", "code": "invalid"},
            ],
        }
        error = error_from_response(422, body(data))

        assert isinstance(error, UnprocessableEntityError)
        assert error.field_errors == [
            FieldError(field="name", code="missing_field", resource="Repository"),
            FieldError(field="private", code="invalid", resource="Repository"),
        ]
        assert "name: missing_field" in str(error)

    def test_422_skips_malformed_error_entries(self):
        data = {"message": "Validation Failed", "errors": ["oops", {"field": "name", "code": "x"}]}
        error = error_from_response(422, body(data))
        assert [e.field for e in error.field_errors] == ["name"]

    def test_other_client_error(self):
        error = error_from_response(409, body({"message": "Conflict"}))
        assert type(error) is ClientError
        assert error.status_code == 409

    def test_server_error(self):
        error = error_from_response(502, b"<html>Bad gateway</html>")
        assert isinstance(error, ServerError)
        assert error.status_code == 502
        assert error.message == "HTTP 502"

    def test_malformed_body_never_raises(self):
        for content in (b"not json", b"[1, 2]", None):
            error = error_from_response(400, content)
            assert isinstance(error, ClientError)
            assert error.message == "HTTP 400"
            assert error.response_data == {}

    def test_non_string_message_falls_back_to_status(self):
        error = error_from_response(400, body({"message": 42}))
        assert error.message == "HTTP 400"

    def test_unexpected_status(self):
        error = error_from_response(304, b"")
        assert type(error) is HTTPError
        assert error.status_code == 304


class TestClassify:
    """Tests for classify() on response envelopes."""

    def test_ok_envelope_returns(self):
        classify(ResponseEnvelope(status_code=200, content=b"{}"))

    def test_uses_request_path(self):
        envelope = ResponseEnvelope(
            status_code=404,
            content=b"",
            url=httpx.URL("https://api.github.com/repos/owner/bad%20name"),
        )
        with pytest.raises(InvalidRepositoryError) as exc_info:
            classify(envelope)
        assert exc_info.value.repository == "owner/bad name"

    def test_headers_are_case_insensitive(self):
        envelope = ResponseEnvelope(
            status_code=403,
            headers=httpx.Headers({"x-ratelimit-remaining": "0", "x-ratelimit-reset": "0"}),
        )
        with pytest.raises(RateLimitError) as exc_info:
            classify(envelope)
        assert exc_info.value.reset_at == datetime(1970, 1, 1, tzinfo=timezone.utc)
