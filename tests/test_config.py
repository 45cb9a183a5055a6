"""Tests for MapperConfig validation, profile loading and overlay merge."""

from __future__ import annotations

import sys

import pytest
import yaml

from typo_overlay.core.config import (
    ConfigLoader,
    list_profiles,
    load_profile,
    merge_profiles,
    profile_path,
)
from typo_overlay.core.errors import ConfigError
from typo_overlay.core.models import Category, MapperConfig
from typo_overlay.core.text_utils import DEFAULT_EXCEPTIONS


def _write(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# 1. MapperConfig
# ---------------------------------------------------------------------------


class TestMapperConfig:
    def test_defaults(self):
        config = MapperConfig()
        assert config.enabled_categories == frozenset(Category)
        assert config.exceptions == DEFAULT_EXCEPTIONS
        assert config.sentence_spacing is False

    def test_from_dict_roundtrip(self):
        data = {
            "categories": ["en_dash", "single_quote"],
            "exceptions": ["bout"],
            "sentence_spacing": True,
        }
        config = MapperConfig.from_dict(data)
        assert config.enabled_categories == {Category.EN_DASH, Category.SINGLE_QUOTE}
        assert MapperConfig.from_dict(config.to_dict()) == config

    def test_category_tokens_are_case_insensitive(self):
        config = MapperConfig.from_dict({"categories": ["EM_DASH"]})
        assert config.enabled_categories == {Category.EM_DASH}

    def test_unknown_category_fails_fast(self):
        with pytest.raises(ConfigError, match="ellipsis"):
            MapperConfig.from_dict({"categories": ["ellipsis"]})

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError, match="colour"):
            MapperConfig.from_dict({"colour": "red"})

    def test_invalid_exception_regex_rejected(self):
        with pytest.raises(ConfigError, match="Invalid exception fragment"):
            MapperConfig.from_dict({"exceptions": ["(unclosed"]})

    @pytest.mark.skipif(sys.version_info < (3, 11), reason="mid-pattern flags only warn before 3.11")
    def test_fragments_that_cannot_be_combined_rejected(self):
        # Compiles alone, but a global flag is illegal mid-pattern.
        with pytest.raises(ConfigError, match="cannot be combined"):
            MapperConfig(exceptions=("(?i)bout",))

    @pytest.mark.parametrize("bad", ["bout", [""], [3]])
    def test_exception_type_checks(self, bad):
        with pytest.raises(ConfigError):
            MapperConfig.from_dict({"exceptions": bad})

    def test_sentence_spacing_must_be_bool(self):
        with pytest.raises(ConfigError):
            MapperConfig.from_dict({"sentence_spacing": "yes"})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            MapperConfig(enabled_categories=["nope"])

    def test_with_category_returns_new_snapshot(self):
        config = MapperConfig()
        reduced = config.with_category(Category.EM_DASH, False)
        assert Category.EM_DASH in config.enabled_categories
        assert Category.EM_DASH not in reduced.enabled_categories
        assert reduced.exceptions == config.exceptions

    def test_is_frozen(self):
        config = MapperConfig()
        with pytest.raises(AttributeError):
            config.sentence_spacing = True


# ---------------------------------------------------------------------------
# 2. Built-in profiles
# ---------------------------------------------------------------------------


class TestBuiltinProfiles:
    def test_default_profile_file_exists(self):
        path = profile_path("default")
        assert path.exists(), f"default.yml not found at {path}"
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["id"] == "default"

    def test_list_profiles(self):
        assert {"default", "prose", "quotes_only"} <= set(list_profiles())

    def test_default_matches_mapper_defaults(self):
        assert load_profile("default") == MapperConfig()

    def test_prose_enables_sentence_spacing(self):
        assert load_profile("prose").sentence_spacing is True

    def test_quotes_only(self):
        config = load_profile("quotes_only")
        assert config.enabled_categories == {Category.SINGLE_QUOTE, Category.DOUBLE_QUOTE}
        assert config.exceptions == DEFAULT_EXCEPTIONS

    def test_unknown_profile(self):
        with pytest.raises(ConfigError, match="Unknown profile"):
            load_profile("does_not_exist")


# ---------------------------------------------------------------------------
# 3. Loader and overlay merge
# ---------------------------------------------------------------------------


class TestConfigLoader:
    def test_merge_replaces_keys(self):
        assert merge_profiles({"a": 1, "b": 2}, {"b": 99, "c": 3}) == {"a": 1, "b": 99, "c": 3}

    def test_merge_lists_replace(self):
        result = merge_profiles({"exceptions": ["a", "b"]}, {"exceptions": ["c"]})
        assert result == {"exceptions": ["c"]}

    def test_merge_null_resets_key(self):
        result = merge_profiles({"sentence_spacing": True, "id": "x"}, {"sentence_spacing": None})
        assert result == {"id": "x"}

    def test_merge_leaves_inputs_alone(self):
        base = {"exceptions": ["a"]}
        merge_profiles(base, {"exceptions": ["b"]})
        assert base == {"exceptions": ["a"]}

    def test_null_in_overlay_restores_default(self, tmp_path):
        overlay = _write(tmp_path / "mine.yml", {"categories": None})
        config = ConfigLoader().load(profile_path("quotes_only"), overlay)
        assert config.enabled_categories == frozenset(Category)

    def test_overlay_on_builtin(self, tmp_path):
        overlay = _write(tmp_path / "mine.yml", {"sentence_spacing": True, "exceptions": ["nuff"]})
        config = ConfigLoader().load(profile_path("default"), overlay)
        assert config.sentence_spacing is True
        assert config.exceptions == ("nuff",)
        assert config.enabled_categories == frozenset(Category)

    def test_missing_overlay_is_ignored(self, tmp_path):
        config = ConfigLoader().load(profile_path("default"), tmp_path / "nope.yml")
        assert config == MapperConfig()

    def test_missing_base_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigLoader().load(tmp_path / "nope.yml")

    def test_invalid_profile_names_file(self, tmp_path):
        path = _write(tmp_path / "bad.yml", {"categories": ["curly"]})
        with pytest.raises(ConfigError, match="bad.yml"):
            ConfigLoader().load(path)

    def test_non_mapping_yaml_rejected(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- single_quote\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigLoader().load(path)

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert ConfigLoader().load(path) == MapperConfig()
