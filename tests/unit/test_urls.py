"""Tests for request URL construction."""

import pytest

from groupme_utils.core.client import BASE_URL, MalformedRequestError, URLBuilder, redact_token


class TestURLBuilder:
    """Test cases for URLBuilder.build_url."""

    @pytest.fixture
    def builder(self) -> URLBuilder:
        return URLBuilder("abc")

    def test_group_url_exact(self, builder):
        """A single group URL carries only the token."""
        assert builder.build_url("/groups/42") == "https://api.groupme.com/v3/groups/42?token=abc"

    def test_empty_params_still_have_token(self, builder):
        assert builder.build_url("/groups", {}) == f"{BASE_URL}/groups?token=abc"
        assert builder.build_url("/groups") == f"{BASE_URL}/groups?token=abc"

    def test_params_and_single_token(self, builder):
        """Each parameter appears once and the token exactly once, in any order."""
        params = {"after_id": "1234", "limit": "100", "acceptance": "yes"}
        url = builder.build_url("/groups/42/messages", params)

        base, query = url.split("?", 1)
        pairs = query.split("&")

        assert base == f"{BASE_URL}/groups/42/messages"
        assert pairs.count("token=abc") == 1
        assert sorted(pairs) == sorted(["after_id=1234", "limit=100", "acceptance=yes", "token=abc"])

    def test_token_is_last(self, builder):
        url = builder.build_url("/groups", {"page": "2"})
        assert url.endswith("&token=abc")

    def test_custom_base_url(self):
        builder = URLBuilder("abc", base_url="https://example.test/v3/")
        assert builder.build_url("/groups") == "https://example.test/v3/groups?token=abc"

    def test_target_must_start_with_slash(self, builder):
        with pytest.raises(MalformedRequestError):
            builder.build_url("groups")

    @pytest.mark.parametrize("value", ["a b", "1&limit=5", "x#y", "a=b", "line\nbreak", "q?"])
    def test_unsafe_values_rejected(self, builder, value):
        """Values needing percent-encoding are refused instead of encoded."""
        with pytest.raises(MalformedRequestError) as exc_info:
            builder.build_url("/groups/42/messages", {"after_id": value})

        assert exc_info.value.code == "MALFORMED_REQUEST"

    def test_unsafe_key_rejected(self, builder):
        with pytest.raises(MalformedRequestError):
            builder.build_url("/groups", {"bad key": "1"})

    def test_unsafe_target_rejected(self, builder):
        with pytest.raises(MalformedRequestError):
            builder.build_url("/groups/4 2")

    def test_error_redacts_token(self):
        builder = URLBuilder("secret")
        with pytest.raises(MalformedRequestError) as exc_info:
            builder.build_url("/groups", {"after_id": "a b"})

        assert "secret" not in exc_info.value.details["url"]
        assert "token=***" in exc_info.value.details["url"]


def test_redact_token():
    assert redact_token(f"{BASE_URL}/groups?limit=1&token=abc") == f"{BASE_URL}/groups?limit=1&token=***"
    assert redact_token(f"{BASE_URL}/groups") == f"{BASE_URL}/groups"
