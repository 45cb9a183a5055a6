"""Quote orientation rules.

Straight quotes are turned into curly ones from their immediate neighbours
only. This is a word-boundary heuristic, not a grammar: ``'n'`` or a leading
elision missing from the exception list will come out wrong, and that is
accepted.

A quote right after a letter or digit never opens, so the quote in
``'no'.`` or ``"yes".`` closes even though punctuation follows it.

Single-quote rules run in this order:

1. exception fragment after the apostrophe ('bout, 'em, '90s) → right
2. letter on both sides (it's, O'Neil) → right
3. opening: followed by a letter or punctuation, not preceded by a
   letter or digit → left
4. closing: preceded by a letter or punctuation → right
"""

from __future__ import annotations

from typo_overlay.core.models import Category, Directive, MapperConfig
from typo_overlay.core.rule_base import PatternRule, registry
from typo_overlay.core.text_utils import (
    LEFT_DOUBLE_QUOTE,
    LEFT_SINGLE_QUOTE,
    RIGHT_DOUBLE_QUOTE,
    RIGHT_SINGLE_QUOTE,
    compile_exceptions,
    is_alnum,
    is_alnum_or_punct,
)


def _next_is(text: str, pos: int, predicate) -> bool:
    return pos + 1 < len(text) and predicate(text[pos + 1])


def _prev_is(text: str, pos: int, predicate) -> bool:
    return pos > 0 and predicate(text[pos - 1])


# ---------------------------------------------------------------------------
# Double quotes
# ---------------------------------------------------------------------------


@registry.register
class OpeningDoubleQuoteRule(PatternRule):
    rule_id = "quotes.double.opening"
    name = "Opening double quote"
    category = Category.DOUBLE_QUOTE
    priority = 10
    triggers = '"'

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        if _next_is(text, pos, is_alnum_or_punct) and not _prev_is(text, pos, is_alnum):
            return self.directive(pos, pos + 1, LEFT_DOUBLE_QUOTE)
        return None


@registry.register
class ClosingDoubleQuoteRule(PatternRule):
    rule_id = "quotes.double.closing"
    name = "Closing double quote"
    category = Category.DOUBLE_QUOTE
    priority = 20
    triggers = '"'

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        if _prev_is(text, pos, is_alnum_or_punct):
            return self.directive(pos, pos + 1, RIGHT_DOUBLE_QUOTE)
        return None


# ---------------------------------------------------------------------------
# Single quotes
# ---------------------------------------------------------------------------


@registry.register
class ElisionSingleQuoteRule(PatternRule):
    """An apostrophe starting a known elision is a closing quote."""

    rule_id = "quotes.single.exception"
    name = "Elision apostrophe"
    category = Category.SINGLE_QUOTE
    priority = 30
    triggers = "'"

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        pattern = compile_exceptions(config.exceptions)
        if pattern is not None and pattern.match(text, pos + 1):
            return self.directive(pos, pos + 1, RIGHT_SINGLE_QUOTE)
        return None


@registry.register
class InnerSingleQuoteRule(PatternRule):
    """Possessive or contraction: a letter or digit on each side."""

    rule_id = "quotes.single.inner"
    name = "Inner apostrophe"
    category = Category.SINGLE_QUOTE
    priority = 40
    triggers = "'"

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        if _prev_is(text, pos, is_alnum) and _next_is(text, pos, is_alnum):
            return self.directive(pos, pos + 1, RIGHT_SINGLE_QUOTE)
        return None


@registry.register
class OpeningSingleQuoteRule(PatternRule):
    rule_id = "quotes.single.opening"
    name = "Opening single quote"
    category = Category.SINGLE_QUOTE
    priority = 50
    triggers = "'"

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        if _next_is(text, pos, is_alnum_or_punct) and not _prev_is(text, pos, is_alnum):
            return self.directive(pos, pos + 1, LEFT_SINGLE_QUOTE)
        return None


@registry.register
class ClosingSingleQuoteRule(PatternRule):
    rule_id = "quotes.single.closing"
    name = "Closing single quote"
    category = Category.SINGLE_QUOTE
    priority = 60
    triggers = "'"

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        if _prev_is(text, pos, is_alnum_or_punct):
            return self.directive(pos, pos + 1, RIGHT_SINGLE_QUOTE)
        return None
