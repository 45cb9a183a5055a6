"""Hyphen-run rules.

Only runs of exactly two or exactly three hyphens are reinterpreted. Both
patterns look behind and ahead for another hyphen, so a run of four or more
(a markdown rule, ``----``) is left alone entirely.
"""

from __future__ import annotations

import re

from typo_overlay.core.models import Category, Directive, MapperConfig
from typo_overlay.core.rule_base import PatternRule, registry
from typo_overlay.core.text_utils import EM_DASH, EN_DASH

_EN_DASH_RE = re.compile(r"(?<!-)--(?!-)")
_EM_DASH_RE = re.compile(r"(?<!-)---(?!-)")


@registry.register
class EnDashRule(PatternRule):
    rule_id = "dashes.en"
    name = "En dash"
    category = Category.EN_DASH
    priority = 70
    triggers = "-"

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        m = _EN_DASH_RE.match(text, pos)
        if m:
            return self.directive(m.start(), m.end(), EN_DASH)
        return None


@registry.register
class EmDashRule(PatternRule):
    rule_id = "dashes.em"
    name = "Em dash"
    category = Category.EM_DASH
    priority = 80
    triggers = "-"

    def match(self, text: str, pos: int, config: MapperConfig) -> Directive | None:
        m = _EM_DASH_RE.match(text, pos)
        if m:
            return self.directive(m.start(), m.end(), EM_DASH)
        return None
