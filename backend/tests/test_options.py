"""
Option Layer Tests

Verifies:
1. #+OPTIONS: items are parsed and coerced
2. Invalid per-document values keep the configured default
3. Document overrides beat configured defaults and report buffer scope
4. Settings are read-only
5. Environment configuration
"""

import pytest

from gbrief_letter.config import LetterConfig, get_config, parse_bool, reset_config
from gbrief_letter.models import DuplicateTagPolicy, Keyword, SettingScope
from gbrief_letter.services.letter_export import (
    OPTIONS_BY_NAME,
    build_settings,
    coerce_value,
    parse_options_line,
    parse_tag_list,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def config():
    return LetterConfig(author=None)


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "GBRIEF_CLASS", "GBRIEF_CLASS_OPTIONS", "GBRIEF_FOLDMARKS", "GBRIEF_PUNCHMARKS",
        "GBRIEF_WINDOWMARKS", "GBRIEF_SEPARATORS", "GBRIEF_PREFER_SPECIAL_HEADINGS",
        "GBRIEF_DUPLICATE_TAGS", "GBRIEF_TIMESTAMP",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()


# =============================================================================
# PARSING
# =============================================================================

class TestParsing:

    def test_options_line(self):
        pairs = parse_options_line("foldmarks:nil after-closing-order:(cc ps) toc:t")

        assert pairs == [
            ("foldmarks", "nil"),
            ("after-closing-order", "(cc ps)"),
            ("toc", "t"),
        ]

    @pytest.mark.parametrize("raw,expected", [
        ("t", True), ("nil", False), ("TRUE", True), ("no", False), ("1", True), (False, False),
    ])
    def test_parse_bool(self, raw, expected):
        assert parse_bool(raw) is expected

    def test_parse_bool_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_bool("maybe")

    @pytest.mark.parametrize("raw", ["(cc ps)", "cc ps", "cc,ps", ["cc", "ps"]])
    def test_tag_list_forms(self, raw):
        assert parse_tag_list(raw) == ["cc", "ps"]

    def test_coerce_string_option(self):
        assert coerce_value(OPTIONS_BY_NAME["subject"], None) == ""
        assert coerce_value(OPTIONS_BY_NAME["subject"], "Hi") == "Hi"


# =============================================================================
# SETTINGS LAYERS
# =============================================================================

class TestBuildSettings:

    def test_defaults_without_keywords(self, config):
        settings = build_settings(config, [])

        assert settings.get("use_foldmarks") is True
        assert settings.get("after_closing_order") == ["ps", "encl", "cc"]
        assert settings.overrides == {}
        assert settings.scope("use_foldmarks") == SettingScope.GLOBAL

    def test_options_keyword_overrides(self, config):
        settings = build_settings(config, [Keyword("OPTIONS", "foldmarks:nil windowmarks:t")])

        assert settings.get("use_foldmarks") is False
        assert settings.get("use_windowmarks") is True
        assert settings.scope("use_windowmarks") == SettingScope.BUFFER
        assert settings.defaults["use_foldmarks"] is True

    def test_keyword_overrides(self, config):
        settings = build_settings(config, [Keyword("subject", "Hello"), Keyword("SUBJECT", "Again")])

        assert settings.get("subject") == "Again"
        assert settings.is_overridden("subject")

    def test_invalid_boolean_keeps_default(self, config):
        settings = build_settings(config, [Keyword("OPTIONS", "foldmarks:sometimes")])

        assert settings.get("use_foldmarks") is True
        assert not settings.is_overridden("use_foldmarks")

    def test_unknown_item_is_ignored(self, config):
        settings = build_settings(config, [Keyword("OPTIONS", "toc:nil punchmarks:nil")])

        assert settings.get("use_punchmarks") is False
        assert "toc" not in settings.overrides

    def test_unrelated_keywords_are_not_settings(self, config):
        settings = build_settings(config, [Keyword("LATEX", "\\relax")])

        assert settings.overrides == {}

    def test_extra_overrides_beat_keywords(self, config):
        settings = build_settings(
            config,
            [Keyword("SUBJECT", "From keyword")],
            {"subject": "From caller", "use_separators": "t"},
        )

        assert settings.get("subject") == "From caller"
        assert settings.get("use_separators") is True

    def test_settings_are_read_only(self, config):
        settings = build_settings(config, [Keyword("SUBJECT", "Hello")])

        with pytest.raises(TypeError):
            settings.overrides["subject"] = "Changed"
        with pytest.raises(TypeError):
            settings.defaults["subject"] = "Changed"


# =============================================================================
# CONFIGURATION
# =============================================================================

class TestConfig:

    def test_env_overrides_defaults(self, clean_env):
        clean_env.setenv("GBRIEF_FOLDMARKS", "false")
        clean_env.setenv("GBRIEF_SEPARATORS", "t")
        clean_env.setenv("GBRIEF_DUPLICATE_TAGS", "first")
        clean_env.setenv("GBRIEF_CLASS", "my-brief")

        config = LetterConfig.from_env()

        assert config.use_foldmarks is False
        assert config.use_separators is True
        assert config.duplicate_tag_policy == DuplicateTagPolicy.FIRST_WINS
        assert config.latex_class == "my-brief"

    def test_unknown_duplicate_policy_fails(self, clean_env):
        clean_env.setenv("GBRIEF_DUPLICATE_TAGS", "random")

        with pytest.raises(ValueError):
            LetterConfig.from_env()

    def test_get_config_is_cached(self, clean_env):
        assert get_config() is get_config()

    def test_option_defaults_cover_option_table(self, config):
        defaults = config.option_defaults()

        assert set(OPTIONS_BY_NAME) <= set(defaults)
        assert "duplicate_tag_policy" not in defaults
