"""
Unit tests for conventional commit parsing, formatting and validation.

Run with:
    pytest tests/test_conventional.py -v
"""

import pytest

from msgcheck import COMMIT_TYPE_NAMES
from msgcheck.core import (
    ConventionalCommit,
    format_conventional_commit,
    parse_conventional_commit,
    validate_conventional_commit,
)


# ---------------------------------------------------------------------------
# parse_conventional_commit — header
# ---------------------------------------------------------------------------

class TestParseHeader:

    def test_type_scope_description(self):
        commit = parse_conventional_commit("feat(ui): add new button component")
        assert commit.type == "feat"
        assert commit.scope == "ui"
        assert commit.description == "add new button component"
        assert commit.is_breaking_change is False
        assert commit.is_valid is True

    def test_without_scope(self):
        commit = parse_conventional_commit("fix: handle null user")
        assert commit.type == "fix"
        assert commit.scope == ""
        assert commit.description == "handle null user"

    def test_bang_marks_breaking_change(self):
        commit = parse_conventional_commit("feat(api)!: change response format")
        assert commit.is_breaking_change is True
        assert commit.scope == "api"

    def test_bang_without_scope(self):
        assert parse_conventional_commit("refactor!: drop python 3.8").is_breaking_change is True

    @pytest.mark.parametrize("commit_type", COMMIT_TYPE_NAMES)
    def test_every_known_type_is_valid(self, commit_type):
        assert parse_conventional_commit(f"{commit_type}: Do the thing").is_valid is True

    def test_unknown_type_parses_but_is_invalid(self):
        commit = parse_conventional_commit("wip: half done")
        assert commit.type == "wip"
        assert commit.description == "half done"
        assert commit.is_valid is False

    @pytest.mark.parametrize("message", [
        "implement new feature",
        "Feat: uppercase type",
        "feat add login",
        "feat:",
        "",
    ])
    def test_no_header_gives_empty_commit(self, message):
        commit = parse_conventional_commit(message)
        assert commit == ConventionalCommit()
        assert commit.is_valid is False

    def test_none_is_treated_as_empty(self):
        assert parse_conventional_commit(None) == ConventionalCommit()


# ---------------------------------------------------------------------------
# parse_conventional_commit — body and footer
# ---------------------------------------------------------------------------

class TestParseSections:

    def test_single_section_is_body(self):
        commit = parse_conventional_commit("fix: Handle timeout\n\nRetry twice before failing.")
        assert commit.body == "Retry twice before failing."
        assert commit.footer == ""

    def test_single_trailer_like_section_is_still_body(self):
        commit = parse_conventional_commit("fix: Handle timeout\n\nRefs: #12")
        assert commit.body == "Refs: #12"
        assert commit.footer == ""

    def test_body_and_footer(self):
        message = "fix: Handle timeout\n\nRetry twice before failing.\n\nReviewed-by: Sam"
        commit = parse_conventional_commit(message)
        assert commit.body == "Retry twice before failing."
        assert commit.footer == "Reviewed-by: Sam"

    def test_breaking_change_footer(self):
        message = "feat: New config loader\n\nReads TOML now.\n\nBREAKING CHANGE: .ini files are ignored"
        commit = parse_conventional_commit(message)
        assert commit.is_breaking_change is True
        assert commit.footer == "BREAKING CHANGE: .ini files are ignored"

    def test_multiple_body_paragraphs(self):
        message = "docs: Rewrite intro\n\nFirst paragraph.\n\nSecond paragraph.\n\nCloses: #4"
        commit = parse_conventional_commit(message)
        assert commit.body == "First paragraph.\n\nSecond paragraph."
        assert commit.footer == "Closes: #4"

    def test_whitespace_only_separator_line(self):
        commit = parse_conventional_commit("fix: Trim input\n   \nStrip both ends.")
        assert commit.body == "Strip both ends."


# ---------------------------------------------------------------------------
# format_conventional_commit
# ---------------------------------------------------------------------------

class TestFormat:

    @pytest.mark.parametrize("message", [
        "feat(ui): add new button component",
        "fix: Handle timeout\n\nRetry twice before failing.",
        "feat(api)!: Remove endpoints\n\nOld routes are gone.\n\nBREAKING CHANGE: /v1 removed",
        "chore: Bump deps\n\nKeeps CI green.\n\nRefs: #9",
    ])
    def test_canonical_messages_reproduce(self, message):
        assert format_conventional_commit(parse_conventional_commit(message)) == message

    def test_footer_only_breaking_change_gains_bang(self):
        message = "feat: Loader\n\nBody.\n\nBREAKING CHANGE: gone"
        commit = parse_conventional_commit(message)
        formatted = format_conventional_commit(commit)
        assert formatted.startswith("feat!: Loader")
        assert parse_conventional_commit(formatted) == commit

    def test_minimal_commit(self):
        commit = ConventionalCommit(type="docs", description="Fix typo")
        assert format_conventional_commit(commit) == "docs: Fix typo"


# ---------------------------------------------------------------------------
# validate_conventional_commit
# ---------------------------------------------------------------------------

class TestValidate:

    def test_clean_commit(self):
        result = validate_conventional_commit(parse_conventional_commit("feat: Add login"))
        assert result.is_valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_invalid_type(self):
        result = validate_conventional_commit(ConventionalCommit(type="wip", description="Stuff"))
        assert result.is_valid is False
        assert result.errors == ["Invalid commit type: wip"]

    def test_missing_description(self):
        result = validate_conventional_commit(ConventionalCommit(type="fix"))
        assert "Description is required" in result.errors
        assert result.warnings == []

    def test_long_description_warns(self):
        result = validate_conventional_commit(ConventionalCommit(type="fix", description="A" * 101))
        assert result.is_valid is True
        assert result.warnings == ["Description is too long (> 100 characters)"]

    def test_lowercase_description_warns(self):
        result = validate_conventional_commit(ConventionalCommit(type="fix", description="handle it"))
        assert result.warnings == ["Description should start with a capital letter"]

    def test_digit_start_is_not_lowercase(self):
        result = validate_conventional_commit(ConventionalCommit(type="fix", description="404 page"))
        assert result.warnings == []

    def test_breaking_without_footer_warns(self):
        commit = parse_conventional_commit("feat!: Drop old API")
        result = validate_conventional_commit(commit)
        assert result.warnings == ["Breaking changes should be described in the footer"]

    def test_collects_every_problem(self):
        result = validate_conventional_commit(ConventionalCommit(type="nope", description="x" * 120))
        assert len(result.errors) == 1
        assert len(result.warnings) == 2
