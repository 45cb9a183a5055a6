"""Core data model dataclasses.

All other modules import from here. Keep this module free of side-effects so
it can be used in tests and host integrations without loading any rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from typo_overlay.core.errors import ConfigError
from typo_overlay.core.text_utils import (
    DEFAULT_EXCEPTIONS,
    EM_DASH,
    EN_DASH,
    LEFT_DOUBLE_QUOTE,
    LEFT_SINGLE_QUOTE,
    RIGHT_DOUBLE_QUOTE,
    RIGHT_SINGLE_QUOTE,
    compile_exceptions,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Category(str, Enum):
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    EN_DASH = "en_dash"
    EM_DASH = "em_dash"

    @property
    def glyphs(self) -> frozenset[str]:
        """The replacement strings this category may emit."""
        return CATEGORY_GLYPHS[self]

    @classmethod
    def parse(cls, token: Any) -> "Category":
        """Return the Category for *token*, raising ConfigError if unknown."""
        if isinstance(token, Category):
            return token
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            known = ", ".join(c.value for c in cls)
            raise ConfigError(
                f"Unknown category {token!r} (expected one of: {known})"
            ) from None


CATEGORY_GLYPHS: dict[Category, frozenset[str]] = {
    Category.SINGLE_QUOTE: frozenset({LEFT_SINGLE_QUOTE, RIGHT_SINGLE_QUOTE}),
    Category.DOUBLE_QUOTE: frozenset({LEFT_DOUBLE_QUOTE, RIGHT_DOUBLE_QUOTE}),
    Category.EN_DASH: frozenset({EN_DASH}),
    Category.EM_DASH: frozenset({EM_DASH}),
}


# ---------------------------------------------------------------------------
# Directive
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Directive:
    """Display ``replacement`` over ``text[start:end]`` without touching the text."""

    start: int
    end: int
    replacement: str
    rule_id: str = field(default="", compare=False)
    category: Category | None = field(default=None, compare=False)

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    def overlaps(self, other: "Directive") -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "replacement": self.replacement,
            "rule_id": self.rule_id,
            "category": self.category.value if self.category else None,
        }


# ---------------------------------------------------------------------------
# Configuration snapshot
# ---------------------------------------------------------------------------

_CONFIG_KEYS = {"categories", "exceptions", "sentence_spacing"}


@dataclass(frozen=True)
class MapperConfig:
    """Immutable configuration read by a single scan.

    Build a new instance to change anything; a scan never sees a config
    change half-way through.
    """

    enabled_categories: frozenset[Category] = frozenset(Category)
    exceptions: tuple[str, ...] = DEFAULT_EXCEPTIONS
    sentence_spacing: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "enabled_categories",
            frozenset(Category.parse(c) for c in self.enabled_categories),
        )
        if isinstance(self.exceptions, str):
            raise ConfigError("exceptions must be a list of fragments, not a string")
        object.__setattr__(self, "exceptions", tuple(self.exceptions))
        if not isinstance(self.sentence_spacing, bool):
            raise ConfigError(
                f"sentence_spacing must be a boolean, got {self.sentence_spacing!r}"
            )
        # Fail fast on bad fragments rather than on the first scan.
        compile_exceptions(self.exceptions)

    def is_enabled(self, category: Category | None) -> bool:
        if category is None:
            return self.sentence_spacing
        return category in self.enabled_categories

    def with_category(self, category: Category, enabled: bool) -> "MapperConfig":
        cats = set(self.enabled_categories)
        if enabled:
            cats.add(category)
        else:
            cats.discard(category)
        return MapperConfig(frozenset(cats), self.exceptions, self.sentence_spacing)

    @classmethod
    def from_dict(cls, data: dict | None) -> "MapperConfig":
        """Validate a plain dict (e.g. parsed YAML) into a MapperConfig.

        Missing keys fall back to the defaults. Unknown keys, unknown category
        tokens, non-string or invalid exception fragments all raise
        ConfigError.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        unknown = set(data) - _CONFIG_KEYS
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = {}
        if "categories" in data:
            kwargs["enabled_categories"] = frozenset(
                Category.parse(c) for c in _as_list(data["categories"], "categories")
            )
        if "exceptions" in data:
            fragments = _as_list(data["exceptions"], "exceptions")
            for frag in fragments:
                if not isinstance(frag, str) or not frag:
                    raise ConfigError(f"Exception fragment must be a non-empty string: {frag!r}")
            kwargs["exceptions"] = tuple(fragments)
        if "sentence_spacing" in data:
            kwargs["sentence_spacing"] = data["sentence_spacing"]
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {
            "categories": [c.value for c in Category if c in self.enabled_categories],
            "exceptions": list(self.exceptions),
            "sentence_spacing": self.sentence_spacing,
        }


def _as_list(value: Any, key: str) -> list:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ConfigError(f"{key} must be a list, got {value!r}")
    return list(value)
