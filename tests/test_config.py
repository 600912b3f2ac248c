"""
Unit tests for Config, ConfigManager and the custom pattern loader.

Run with:
    pytest tests/test_config.py -v
"""

import json
import re

import pytest

from msgcheck.config import Config, ConfigManager, PatternConfigError, load_custom_patterns, pattern_from_dict


@pytest.fixture
def rule():
    """A valid custom rule definition."""
    return {
        "id": "no-ticket",
        "name": "Missing Ticket",
        "description": "Subject should reference a ticket",
        "regex": "^(?!.*[A-Z]+-\\d+)",
        "flags": "i",
        "severity": "warning",
        "category": "workflow",
        "suggestion": "Add the ticket key, e.g. PROJ-123",
        "examples": {"good": ["PROJ-1 add login"], "bad": ["add login"]},
    }


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.conventional_commit is False
        assert config.subject_length_limit == 50
        assert config.detect_patterns is True
        assert config.min_severity is None
        assert config.disabled_patterns == []

    def test_to_dict_excludes_none(self):
        data = Config().to_dict()
        assert "min_severity" not in data
        assert data["subject_length_limit"] == 50

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"subject_length_limit": 72, "provider": "claude"})
        assert config.subject_length_limit == 72

    @pytest.mark.parametrize("value", [0, -5, "72", True])
    def test_validate_invalid_subject_length_limit(self, value):
        config = Config(subject_length_limit=value)
        warnings = config.validate()
        assert len(warnings) == 1
        assert "subject_length_limit" in warnings[0]
        assert config.subject_length_limit == 50

    def test_validate_invalid_min_severity(self):
        config = Config(min_severity="critical")
        warnings = config.validate()
        assert "min_severity" in warnings[0]
        assert config.min_severity is None

    def test_validate_non_bool_flag(self):
        config = Config(conventional_commit="yes")
        assert config.validate() == ["Invalid conventional_commit 'yes', using false"]
        assert config.conventional_commit is False

    def test_validate_disabled_patterns(self):
        config = Config(disabled_patterns="wip-commit")
        config.validate()
        assert config.disabled_patterns == []

    def test_validate_custom_patterns(self):
        config = Config(custom_patterns={"id": "x"})
        config.validate()
        assert config.custom_patterns == []

    def test_validate_valid_config_no_warnings(self):
        config = Config(conventional_commit=True, subject_length_limit=72, min_severity="warning",
                        disabled_patterns=["merge-commit"])
        assert config.validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        config = Config.from_dict({"min_severity": "loud"})
        assert config.min_severity is None
        assert "Config warning" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# ConfigManager
# ---------------------------------------------------------------------------

class TestConfigManager:

    @pytest.fixture
    def home(self, tmp_path, monkeypatch):
        home = tmp_path / "fakehome"
        home.mkdir()
        project = tmp_path / "project"
        project.mkdir()
        monkeypatch.chdir(project)
        monkeypatch.setattr("pathlib.Path.home", lambda: home)
        return home

    def test_load_returns_defaults_when_no_file(self, home):
        manager = ConfigManager()
        assert manager.load() == Config()
        assert manager.get_config_path() is None

    def test_load_reads_local_file(self, home, tmp_path):
        local = tmp_path / "project" / ".cmcrc"
        local.write_text(json.dumps({"conventional_commit": True}))
        (home / ".cmcrc").write_text(json.dumps({"subject_length_limit": 72}))

        manager = ConfigManager()
        config = manager.load()
        assert config.conventional_commit is True
        assert config.subject_length_limit == 50
        assert manager.get_config_path() == local

    def test_load_falls_back_to_home(self, home):
        (home / ".cmcrc").write_text(json.dumps({"subject_length_limit": 72}))
        manager = ConfigManager()
        assert manager.load().subject_length_limit == 72
        assert manager.get_config_path() == home / ".cmcrc"

    def test_save_and_load_roundtrip(self, home):
        original = Config(conventional_commit=True, disabled_patterns=["merge-commit"],
                          custom_patterns=[{"id": "x"}])
        path = ConfigManager().save(original, global_config=True)
        assert path == home / ".cmcrc"
        assert ConfigManager().load() == original

    def test_save_local(self, home, tmp_path):
        path = ConfigManager().save(Config(subject_length_limit=60), global_config=False)
        assert path == tmp_path / "project" / ".cmcrc"

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_malformed_file_returns_defaults(self, home, tmp_path, capsys, content):
        (tmp_path / "project" / ".cmcrc").write_text(content)
        assert ConfigManager().load() == Config()
        assert "Could not load" in capsys.readouterr().err

    def test_load_is_cached(self, home):
        manager = ConfigManager()
        first = manager.load()
        (home / ".cmcrc").write_text(json.dumps({"subject_length_limit": 72}))
        assert manager.load() is first


# ---------------------------------------------------------------------------
# Custom pattern loader
# ---------------------------------------------------------------------------

class TestPatternLoader:

    def test_valid_rule(self, rule):
        pattern = pattern_from_dict(rule)
        assert pattern.id == "no-ticket"
        assert pattern.regex.flags & re.IGNORECASE
        assert pattern.find_all is False
        assert pattern.contextual_examples.bad == ("add login",)
        assert pattern.regex.search("add login")
        assert not pattern.regex.search("PROJ-1 add login")

    def test_global_flag_sets_find_all(self, rule):
        rule["flags"] = "gm"
        pattern = pattern_from_dict(rule)
        assert pattern.find_all is True
        assert pattern.regex.flags & re.MULTILINE

    def test_description_defaults_to_name(self, rule):
        del rule["description"]
        assert pattern_from_dict(rule).description == "Missing Ticket"

    def test_missing_keys(self, rule):
        del rule["regex"]
        del rule["severity"]
        with pytest.raises(PatternConfigError, match="missing regex, severity"):
            pattern_from_dict(rule)

    @pytest.mark.parametrize("key, value, message", [
        ("severity", "fatal", "invalid severity"),
        ("category", "security", "invalid category"),
        ("flags", "x", "unknown regex flag"),
        ("regex", "(unclosed", "invalid regex"),
    ])
    def test_rejected_values(self, rule, key, value, message):
        rule[key] = value
        with pytest.raises(PatternConfigError, match=message):
            pattern_from_dict(rule)

    @pytest.mark.parametrize("key, value, message", [
        ("regex", 5, "regex must be a string"),
        ("flags", 1, "flags must be a string"),
        ("name", ["Missing"], "name must be a string"),
        ("suggestion", {"text": "x"}, "suggestion must be a string"),
        ("examples", ["bad"], "examples must be an object"),
        ("examples", {"bad": "add login"}, "examples.bad must be a list of strings"),
        ("examples", {"good": [1, 2]}, "examples.good must be a list of strings"),
    ])
    def test_wrong_types_rejected(self, rule, key, value, message):
        rule[key] = value
        with pytest.raises(PatternConfigError, match=re.escape(message)):
            pattern_from_dict(rule)

    def test_null_optional_values_use_defaults(self, rule):
        rule.update(description=None, flags=None, suggestion=None, examples=None)
        pattern = pattern_from_dict(rule)
        assert pattern.description == "Missing Ticket"
        assert pattern.find_all is False
        assert pattern.contextual_examples is None

    def test_wrong_types_reported_not_raised(self, rule):
        entries = [dict(rule, id="a", regex=5), dict(rule, id="b", flags=1), dict(rule, id="c", examples=["bad"])]
        patterns, errors = load_custom_patterns(entries)
        assert patterns == []
        assert [e.split(":")[0] for e in errors] == ["Pattern 'a'", "Pattern 'b'", "Pattern 'c'"]

    def test_not_a_dict(self):
        with pytest.raises(PatternConfigError, match="must be an object"):
            pattern_from_dict(["no-ticket"])

    def test_load_keeps_good_rules(self, rule):
        bad = dict(rule, id="broken", regex="(")
        patterns, errors = load_custom_patterns([rule, bad, "junk"])
        assert [p.id for p in patterns] == ["no-ticket"]
        assert len(errors) == 2
        assert "broken" in errors[0]

    def test_load_nothing(self):
        assert load_custom_patterns(None) == ([], [])
