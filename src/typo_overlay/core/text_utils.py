"""Shared glyph constants and character-class helpers.

Used by the rules (core/rules/) for matching, and by the overlay and
exporters to recognise the replacements this library emits.
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache

from typo_overlay.core.errors import ConfigError

# ---------------------------------------------------------------------------
# Replacement glyphs
# ---------------------------------------------------------------------------

LEFT_SINGLE_QUOTE = "‘"
RIGHT_SINGLE_QUOTE = "’"
LEFT_DOUBLE_QUOTE = "“"
RIGHT_DOUBLE_QUOTE = "”"
EN_DASH = "–"
EM_DASH = "—"

#: Displayed in place of the single space after a sentence end.
SENTENCE_SPACE = "  "

KNOWN_REPLACEMENTS: frozenset[str] = frozenset(
    {
        LEFT_SINGLE_QUOTE,
        RIGHT_SINGLE_QUOTE,
        LEFT_DOUBLE_QUOTE,
        RIGHT_DOUBLE_QUOTE,
        EN_DASH,
        EM_DASH,
        SENTENCE_SPACE,
    }
)

# ---------------------------------------------------------------------------
# Elisions that take a closing apostrophe: 'bout, 'em, 'cause, '90s ...
# ---------------------------------------------------------------------------

DEFAULT_EXCEPTIONS: tuple[str, ...] = (
    "bout",
    "em",
    "cause",
    "round",
    "twas",
    "tis",
    r"\d\ds?",
)

# ---------------------------------------------------------------------------
# Sentence ends
# ---------------------------------------------------------------------------

SENTENCE_END_CHARS = frozenset(".?!")
SENTENCE_CLOSERS = frozenset("\"')]}" + RIGHT_SINGLE_QUOTE + RIGHT_DOUBLE_QUOTE)


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


def is_alnum(ch: str) -> bool:
    """Letter or digit in any script. The underscore does not count."""
    return ch.isalnum()


def is_punct(ch: str) -> bool:
    """Unicode punctuation (P*) or symbol (S*)."""
    return unicodedata.category(ch)[0] in "PS"


def is_alnum_or_punct(ch: str) -> bool:
    return ch.isalnum() or is_punct(ch)


@lru_cache(maxsize=64)
def compile_exceptions(fragments: tuple[str, ...]) -> re.Pattern[str] | None:
    """Compile exception fragments into one case-insensitive matcher.

    Fragments are tried in order. Each must be followed by a non-alphanumeric
    character or the end of the text, so ``tis`` matches ``'tis`` but not
    ``'tissue``. Returns None for an empty list.
    """
    if not fragments:
        return None
    for frag in fragments:
        try:
            re.compile(frag)
        except re.error as exc:
            raise ConfigError(f"Invalid exception fragment {frag!r}: {exc}") from exc
    alternation = "|".join(f"(?:{frag})" for frag in fragments)
    try:
        return re.compile(rf"(?:{alternation})(?![^\W_])", re.IGNORECASE)
    except re.error as exc:
        # Valid alone but not inside the alternation, e.g. a leading (?i).
        raise ConfigError(
            f"Exception fragments {list(fragments)!r} cannot be combined: {exc}"
        ) from exc
