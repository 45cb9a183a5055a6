"""ConfigLoader: load and merge YAML mapper profiles.

A profile is one YAML file with the keys accepted by
``MapperConfig.from_dict``::

    categories: [single_quote, double_quote, en_dash, em_dash]
    exceptions: [bout, em, cause, round, twas, tis, '\\d\\ds?']
    sentence_spacing: false

Optional ``id`` and ``name`` keys describe the profile and are stripped
before validation. An overlay profile is merged on top of a base one.
Built-in profiles ship as package data under ``typo_overlay/resources/profiles/``.
"""

from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path

import yaml

from typo_overlay.core.errors import ConfigError
from typo_overlay.core.models import MapperConfig

_log = logging.getLogger(__name__)

_META_KEYS = ("id", "name")


def merge_profiles(base: dict, overlay: dict) -> dict:
    """Return *base* with every key set in *overlay* replaced.

    Profiles are flat, so a key in the overlay replaces the base value
    wholesale: an overlay ``exceptions`` list is the new list, not an
    addition to it. An explicit ``null`` in the overlay resets the key to the
    mapper default.
    """
    merged = dict(base)
    for key, val in overlay.items():
        if val is None:
            merged.pop(key, None)
        else:
            merged[key] = val
    return merged


def _profiles_dir() -> Path:
    # hatchling ships the profiles as plain package data, so this is always
    # a real directory.
    return Path(str(importlib.resources.files("typo_overlay.resources.profiles")))


def profile_path(name: str) -> Path:
    """Path of the built-in profile *name*, e.g. ``profile_path("prose")``."""
    return _profiles_dir() / f"{name}.yml"


def _read_yaml(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse profile {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Profile {path} must contain a mapping, got {type(data).__name__}")
    return data


class ConfigLoader:
    """Load a base profile + optional overlay into a MapperConfig."""

    def load_dict(self, base_path: Path, overlay_path: Path | None = None) -> dict:
        """Return the merged raw profile dict, metadata keys included."""
        if not base_path.exists():
            raise ConfigError(f"Profile not found: {base_path}")
        data = _read_yaml(base_path)

        if overlay_path is not None:
            if overlay_path.exists():
                data = merge_profiles(data, _read_yaml(overlay_path))
            else:
                _log.warning("Overlay profile %s does not exist; ignored", overlay_path)
        return data

    def load(self, base_path: Path, overlay_path: Path | None = None) -> MapperConfig:
        """Return the validated MapperConfig.

        Raises:
            ConfigError: if a file is missing, unparsable or invalid.
        """
        data = self.load_dict(base_path, overlay_path)
        for key in _META_KEYS:
            data.pop(key, None)
        try:
            config = MapperConfig.from_dict(data)
        except ConfigError as exc:
            raise ConfigError(f"{base_path.name}: {exc}") from exc
        _log.debug(
            "Loaded profile %s (%d categories, %d exceptions)",
            base_path.name,
            len(config.enabled_categories),
            len(config.exceptions),
        )
        return config


def list_profiles() -> list[str]:
    """Names of the built-in profiles."""
    return sorted(p.stem for p in _profiles_dir().glob("*.yml"))


def load_profile(name: str, overlay_path: Path | None = None) -> MapperConfig:
    """Load a built-in profile by name, e.g. ``load_profile("prose")``."""
    path = profile_path(name)
    if not path.exists():
        raise ConfigError(
            f"Unknown profile {name!r} (available: {', '.join(list_profiles())})"
        )
    return ConfigLoader().load(path, overlay_path)
