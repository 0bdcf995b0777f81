"""
Tests for permission grant parsing.
"""

import pytest

from bizhub.shared.permissions.grants import (
    ExactGrant,
    GlobalGrant,
    InvalidGrantError,
    ResourceWildcardGrant,
    format_grants,
    parse_grant,
    parse_grants,
    parse_stored_grants,
)


class TestParseGrant:
    def test_global_wildcard(self):
        assert parse_grant("*") == GlobalGrant()

    def test_resource_wildcard(self):
        assert parse_grant("clients:*") == ResourceWildcardGrant("clients")

    def test_exact_grant(self):
        assert parse_grant("tasks:read") == ExactGrant("tasks", "read")

    def test_case_and_outer_whitespace_are_normalized(self):
        assert parse_grant("  Tasks:READ ") == ExactGrant("tasks", "read")

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "tasks",
            ":read",
            "tasks:",
            "tasks:read:extra",
            "*:read",
            "tasks: read",
            "ta*sks:read",
            None,
            42,
        ],
    )
    def test_malformed_grants_are_rejected(self, raw):
        with pytest.raises(InvalidGrantError):
            parse_grant(raw)

    def test_str_renders_stored_form(self):
        assert str(GlobalGrant()) == "*"
        assert str(ResourceWildcardGrant("chat")) == "chat:*"
        assert str(ExactGrant("team", "read")) == "team:read"


class TestParseGrants:
    def test_duplicates_collapse(self):
        grants = parse_grants(["tasks:read", "TASKS:read", "tasks:update"])

        assert grants == frozenset(
            {ExactGrant("tasks", "read"), ExactGrant("tasks", "update")}
        )

    def test_first_malformed_grant_raises(self):
        with pytest.raises(InvalidGrantError) as exc_info:
            parse_grants(["tasks:read", "bogus"])

        assert exc_info.value.raw == "bogus"

    def test_stored_grants_skip_malformed_entries(self, caplog):
        grants = parse_stored_grants(["tasks:read", "bogus", ""], "reviewer")

        assert grants == frozenset({ExactGrant("tasks", "read")})
        assert "bogus" in caplog.text

    def test_stored_grants_accept_null(self):
        assert parse_stored_grants(None, "empty") == frozenset()

    def test_format_grants_is_sorted(self):
        grants = parse_grants(["tasks:update", "*", "chat:*"])

        assert format_grants(grants) == ["*", "chat:*", "tasks:update"]
